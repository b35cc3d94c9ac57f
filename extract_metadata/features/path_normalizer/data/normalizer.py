import logging
from pathlib import Path, PurePath
from typing import Union

from extract_metadata.core.errors import EscapesRootError, UnresolvablePathError
from ..domain.interfaces import IPathNormalizer

logger = logging.getLogger(__name__)


def clean_components(path: PurePath) -> PurePath:
    """
    Purely lexical cleanup of an absolute path.
    Drops '.' parts and lets each '..' remove the previously kept part.

    Raises ValueError if a '..' would remove the anchor (root/drive) itself.
    """
    # pathlib already drops '.' parts, but keep the check for raw strings
    kept = []
    for part in path.parts:
        if part == ".":
            continue
        if part == "..":
            if len(kept) <= 1:
                raise ValueError("parent reference climbs above the filesystem root")
            kept.pop()
            continue
        kept.append(part)

    return type(path)(*kept)


class LocalPathNormalizer(IPathNormalizer):
    """
    Canonicalizes against the real filesystem first (follows symlinks),
    then falls back to lexical cleanup for paths that do not exist yet.
    """

    def normalize(self, path: Union[str, PurePath]) -> Path:
        candidate = Path(path)

        # 1. Make absolute against the process working directory
        if not candidate.is_absolute():
            try:
                candidate = Path.cwd() / candidate
            except OSError as e:
                raise UnresolvablePathError(path, f"working directory is unavailable: {e}") from e

        try:
            # 2. Authoritative answer: the filesystem's own view
            return candidate.resolve(strict=True)
        except ValueError as e:
            # e.g. embedded NUL byte
            raise UnresolvablePathError(path, str(e)) from e
        except (OSError, RuntimeError) as e:
            canonical_error = e

        # 3. Best-effort lexical cleanup
        try:
            cleaned = Path(clean_components(candidate))
        except ValueError:
            raise EscapesRootError(path, str(canonical_error)) from canonical_error

        logger.debug(f"Canonicalization failed for {path} ({canonical_error}); using {cleaned}")
        return cleaned
