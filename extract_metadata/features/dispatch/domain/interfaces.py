from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

class IFileHandler(ABC):
    """
    Capability handed to the dispatcher: consume one normalized path.
    Signal failure by raising; each call may fail independently
    without affecting the next one.
    """
    @abstractmethod
    def handle(self, path: Path) -> Any:
        pass
