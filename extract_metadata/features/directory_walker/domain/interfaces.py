from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable

from .models import ExtensionFilter

FileCallback = Callable[[Path], Any]

class IFileWalker(ABC):
    """
    Contract for traversing a filesystem.
    Abstracts os.scandir vs pathlib.
    """
    @abstractmethod
    def walk(self, root: Path, extension: ExtensionFilter, handler: FileCallback) -> int:
        """
        Calls handler(path) for every regular file below root whose
        extension matches. Returns how many files were handed over.

        Raises WalkError if a directory or entry cannot be read.
        Exceptions raised by the handler are not caught here.
        """
        pass
