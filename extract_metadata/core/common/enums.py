# File: extract_metadata/core/common/enums.py

from enum import Enum, unique

@unique
class DispatchMode(str, Enum):
    DIRECTORY = "directory"
    GLOB = "glob"
    SINGLE_FILE = "single_file"

@unique
class FileOutcome(str, Enum):
    PROCESSED = "processed"
    FAILED = "failed"
    SKIPPED = "skipped"
