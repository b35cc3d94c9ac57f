# File: extract_metadata/core/errors.py

from pathlib import Path


class ExtractMetadataError(Exception):
    """Base class for every error raised by this package."""


# --- Structural (run-ending) ---

class StructuralError(ExtractMetadataError):
    """
    Aborts the whole traversal/dispatch.
    The CLI turns these into a non-zero exit code.
    """


class NormalizationError(StructuralError):
    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"Cannot normalize path {path}: {message}")


class EscapesRootError(NormalizationError):
    """Manual cleanup would climb above the filesystem root."""


class UnresolvablePathError(NormalizationError):
    """The OS cannot represent or resolve the path at all."""


class WalkError(StructuralError):
    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read directory entry {path}: {cause}")


class GlobSyntaxError(StructuralError):
    def __init__(self, pattern: str, position: int, message: str):
        self.pattern = pattern
        self.position = position
        super().__init__(f"Invalid glob pattern {pattern!r} at position {position}: {message}")


class InvalidPathError(StructuralError):
    """Path text cannot be represented as UTF-8."""


# --- Per-file (always recovered) ---

class ProcessError(ExtractMetadataError):
    """Failure reported by a per-file handler."""


class SafetensorsFormatError(ProcessError):
    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Invalid safetensors file {path}: {message}")
