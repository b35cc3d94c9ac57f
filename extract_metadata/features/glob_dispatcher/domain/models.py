from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

@dataclass(frozen=True)
class GlobPattern:
    """
    A validated pattern split into path components.
    anchor is '' for patterns relative to the working directory.
    """
    source: str
    anchor: str
    parts: Tuple[str, ...]

    @property
    def is_absolute(self) -> bool:
        return bool(self.anchor)

@dataclass(frozen=True)
class GlobError:
    """
    A directory that could not be read while expanding a pattern.
    Reported in-line; expansion carries on with the remaining matches.
    """
    path: Path
    error: OSError

    def __str__(self) -> str:
        return f"Cannot read {self.path} while expanding pattern: {self.error}"
