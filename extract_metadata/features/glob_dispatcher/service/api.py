import os
import logging
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from extract_metadata.core.errors import NormalizationError
from extract_metadata.features.path_normalizer.service.api import normalize_path
from extract_metadata.features.directory_walker.domain.interfaces import FileCallback

from ..data.glob_expander import LocalGlobExpander
from ..domain.interfaces import IGlobExpander
from ..domain.models import GlobError

logger = logging.getLogger(__name__)

# Singleton Instance for easy import
expander = LocalGlobExpander()


def expand_glob(pattern: str) -> Iterator[Union[Path, GlobError]]:
    """
    Raises GlobSyntaxError right away for a malformed pattern.
    """
    return expander.expand(pattern)


class GlobDispatcher:
    """
    Expands a pattern and hands every matching regular file, normalized,
    to the handler. Per-match problems are reported and skipped.
    """

    def __init__(self, expander: IGlobExpander = expander,
                 normalizer: Callable[[Union[str, Path]], Path] = normalize_path):
        self.expander = expander
        self.normalizer = normalizer

    def dispatch(self, pattern: str, handler: FileCallback,
                 on_skip: Optional[Callable[[str], None]] = None) -> int:
        """
        Returns the number of files handed to the handler.
        on_skip receives a message for every match that could not be dispatched.
        """
        # 1. Fails before any handler call if the pattern is malformed
        matches = self.expander.expand(pattern)

        dispatched = 0
        for match in matches:
            if isinstance(match, GlobError):
                self._skip(str(match), on_skip)
                continue

            # 2. Each match is normalized on its own
            try:
                path = self.normalizer(match)
            except NormalizationError as e:
                self._skip(f"Failed to normalize path {match}: {e}", on_skip)
                continue

            if os.path.isdir(path):
                logger.debug(f"Glob matched a directory, skipping: {path}")
                continue

            handler(path)
            dispatched += 1

        logger.info(f"Glob {pattern!r} dispatched {dispatched} file(s)")
        return dispatched

    @staticmethod
    def _skip(message: str, on_skip: Optional[Callable[[str], None]]) -> None:
        logger.warning(message)
        if on_skip:
            on_skip(message)
