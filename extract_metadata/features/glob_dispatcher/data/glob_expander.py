import os
import stat
import logging
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ..domain.interfaces import IGlobExpander
from ..domain.models import GlobError, GlobPattern
from .pattern import RECURSIVE_WILDCARD, compile_pattern, has_wildcard

logger = logging.getLogger(__name__)

GlobResult = Union[Path, GlobError]


class LocalGlobExpander(IGlobExpander):
    """
    Component-by-component expansion over os.scandir.
    Entries of every directory are sorted by name, and matching is case-sensitive
    on every platform. '*' and '?' also match names starting with a dot.
    """

    def expand(self, pattern: str) -> Iterator[GlobResult]:
        # Validation happens here, not on first next()
        compiled = compile_pattern(pattern)
        return self._iter_pattern(compiled)

    def _iter_pattern(self, compiled: GlobPattern) -> Iterator[GlobResult]:
        if not compiled.parts:
            return

        base = Path(compiled.anchor) if compiled.is_absolute else Path(".")
        logger.debug(f"Expanding {compiled.source!r} from {base}")
        yield from self._match(base, compiled.parts)

    def _match(self, base: Path, parts: Tuple[str, ...]) -> Iterator[GlobResult]:
        if not parts:
            yield base
            return

        head, rest = parts[0], parts[1:]

        # 1. '**': zero directories here, then every subdirectory
        if head == RECURSIVE_WILDCARD:
            yield from self._match(base, rest)

            entries = self._list(base)
            if isinstance(entries, GlobError):
                yield entries
                return
            for entry in entries:
                if self._is_dir(entry, follow_symlinks=False):
                    yield from self._match(base / entry.name, parts)
            return

        # 2. Literal component: no listing needed
        if not has_wildcard(head):
            candidate = base / head
            if rest:
                try:
                    candidate_is_dir = stat.S_ISDIR(os.stat(candidate).st_mode)
                except (FileNotFoundError, NotADirectoryError):
                    return
                except OSError as e:
                    # e.g. an ancestor without search permission
                    yield GlobError(path=candidate, error=e)
                    return
                if candidate_is_dir:
                    yield from self._match(candidate, rest)
            elif os.path.lexists(candidate):
                yield candidate
            return

        # 3. Wildcard component
        entries = self._list(base)
        if isinstance(entries, GlobError):
            yield entries
            return

        for entry in entries:
            if not fnmatchcase(entry.name, head):
                continue
            if rest:
                if self._is_dir(entry, follow_symlinks=True):
                    yield from self._match(base / entry.name, rest)
            else:
                yield base / entry.name

    @staticmethod
    def _list(directory: Path) -> Union[List[os.DirEntry], GlobError]:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            return GlobError(path=directory, error=e)

    @staticmethod
    def _is_dir(entry: os.DirEntry, follow_symlinks: bool) -> bool:
        try:
            return entry.is_dir(follow_symlinks=follow_symlinks)
        except OSError:
            return False
