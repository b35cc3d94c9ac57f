from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

@dataclass(frozen=True)
class SafetensorsHeader:
    """
    The JSON header at the front of a .safetensors file.
    Tensor entries are kept as-is; only '__metadata__' is interpreted.
    """
    path: Path
    header_size: int
    entries: Dict[str, Any] = field(default_factory=dict)

    @property
    def raw_metadata(self) -> Dict[str, Any]:
        metadata = self.entries.get("__metadata__") or {}
        return metadata if isinstance(metadata, dict) else {}

    @property
    def tensor_count(self) -> int:
        return sum(1 for key in self.entries if key != "__metadata__")

@dataclass
class MetadataResult:
    """
    What a successful extraction produced.
    """
    source_path: Path
    output_path: Path
    keys_written: int
    tensor_count: int = 0
