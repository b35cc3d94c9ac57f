from dataclasses import dataclass, field
from threading import Lock
from typing import List, Optional

from extract_metadata.core.common.enums import DispatchMode, FileOutcome

@dataclass
class DispatchSummary:
    """
    Report returned after a dispatch run completes.
    Counters are updated under a lock so the same summary can be shared
    if sibling directories are ever dispatched in parallel.
    """
    mode: Optional[DispatchMode] = None
    files_found: int = 0
    files_processed: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    warnings: List[str] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def record(self, outcome: FileOutcome, message: str = None) -> None:
        with self._lock:
            if outcome == FileOutcome.PROCESSED:
                self.files_found += 1
                self.files_processed += 1
            elif outcome == FileOutcome.FAILED:
                self.files_found += 1
                self.files_failed += 1
            else:
                self.files_skipped += 1

            if message:
                self.warnings.append(message)

    def record_skip(self, message: str) -> None:
        self.record(FileOutcome.SKIPPED, message)
