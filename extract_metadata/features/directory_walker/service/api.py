from pathlib import Path

from ..data.file_walker import LocalFileWalker
from ..domain.interfaces import FileCallback
from ..domain.models import ExtensionFilter

# Singleton Instance for easy import
walker = LocalFileWalker()


def walk_directory(root: Path, extension, handler: FileCallback) -> int:
    """
    Public entry point of the DirectoryWalker feature.
    extension may be a plain string ("safetensors") or an ExtensionFilter.
    """
    return walker.walk(Path(root), ExtensionFilter.of(extension), handler)
