from abc import ABC, abstractmethod
from pathlib import Path, PurePath
from typing import Union

class IPathNormalizer(ABC):
    """
    Contract for turning user input into an absolute, clean path.
    """
    @abstractmethod
    def normalize(self, path: Union[str, PurePath]) -> Path:
        """
        Returns an absolute path without '.' or '..' parts.
        Raises NormalizationError if no such path can be produced.
        """
        pass
