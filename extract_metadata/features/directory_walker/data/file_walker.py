import os
import logging
from pathlib import Path

from extract_metadata.core.errors import WalkError
from ..domain.interfaces import IFileWalker, FileCallback
from ..domain.models import ExtensionFilter

logger = logging.getLogger(__name__)

class LocalFileWalker(IFileWalker):
    """
    Depth-first descent using os.scandir.
    Entries are sorted by name so a fixed tree is always visited in the same order.
    Symlinked directories are not followed, which rules out cycles.
    """

    def walk(self, root: Path, extension: ExtensionFilter, handler: FileCallback) -> int:
        extension = ExtensionFilter.of(extension)
        return self._walk_dir(Path(root), extension, handler)

    def _walk_dir(self, directory: Path, extension: ExtensionFilter, handler: FileCallback) -> int:
        # 1. List the level up front so the handle is released before recursing
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise WalkError(directory, e) from e

        dispatched = 0
        for entry in entries:
            entry_path = directory / entry.name

            # 2. Classify the entry
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                raise WalkError(entry_path, e) from e

            if is_dir:
                dispatched += self._walk_dir(entry_path, extension, handler)
            elif is_file and extension.matches(entry_path):
                # 3. Hand over; failures are the caller's policy
                handler(entry_path)
                dispatched += 1
            elif not is_file:
                logger.debug(f"Skipping non-regular entry: {entry_path}")

        return dispatched
