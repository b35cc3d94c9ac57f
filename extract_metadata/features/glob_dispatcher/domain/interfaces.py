from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Union

from .models import GlobError

class IGlobExpander(ABC):
    """
    Contract for shell-style wildcard expansion against the filesystem.
    """
    @abstractmethod
    def expand(self, pattern: str) -> Iterator[Union[Path, GlobError]]:
        """
        Validates the pattern immediately (raising GlobSyntaxError) and
        returns a lazy, single-use iterator of matches in sorted order.
        """
        pass
