import os
from pathlib import PurePath

from extract_metadata.core.errors import GlobSyntaxError
from ..domain.models import GlobPattern

WILDCARD_CHARS = frozenset("*?[")
RECURSIVE_WILDCARD = "**"

_SEPARATORS = {os.sep, "/"} | ({os.altsep} if os.altsep else set())


def has_wildcard(text: str) -> bool:
    return any(ch in WILDCARD_CHARS for ch in text)


def _is_boundary(pattern: str, index: int) -> bool:
    """True at either end of the pattern or on a path separator."""
    return index < 0 or index >= len(pattern) or pattern[index] in _SEPARATORS


def validate_pattern(pattern: str) -> None:
    """
    Rejects patterns the matcher cannot interpret.

    - '[' must be closed by ']'. A ']' right after '[' or '[!' is literal.
    - '*' runs are one ('*') or two ('**') long.
    - '**' must be a whole path component.
    """
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]

        if ch == "*":
            run_end = i
            while run_end < n and pattern[run_end] == "*":
                run_end += 1
            run = run_end - i
            if run > 2:
                raise GlobSyntaxError(pattern, i, "wildcards are either '*' or '**'")
            if run == 2 and not (_is_boundary(pattern, i - 1) and _is_boundary(pattern, run_end)):
                raise GlobSyntaxError(pattern, i, "'**' must form a single path component")
            i = run_end
            continue

        if ch == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # Leading ']' belongs to the class
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise GlobSyntaxError(pattern, i, "unterminated character class")
            i = close + 1
            continue

        i += 1


def compile_pattern(pattern: str) -> GlobPattern:
    validate_pattern(pattern)

    pure = PurePath(pattern)
    if pure.anchor:
        parts = pure.parts[1:]
    else:
        parts = pure.parts

    # PurePath('') is '.', which has no parts
    return GlobPattern(source=pattern, anchor=pure.anchor, parts=tuple(parts))
