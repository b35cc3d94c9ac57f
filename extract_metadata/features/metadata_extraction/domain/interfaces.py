from abc import ABC, abstractmethod
from pathlib import Path

from .models import SafetensorsHeader

class IHeaderReader(ABC):
    @abstractmethod
    def read_header(self, path: Path) -> SafetensorsHeader:
        """
        Reads and validates the length-prefixed JSON header.
        Raises SafetensorsFormatError for malformed files.
        """
        pass
