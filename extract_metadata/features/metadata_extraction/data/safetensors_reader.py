import json
import struct
import logging
from pathlib import Path
from typing import Any, Dict

from extract_metadata.core.config.settings import settings
from extract_metadata.core.errors import SafetensorsFormatError
from ..domain.interfaces import IHeaderReader
from ..domain.models import SafetensorsHeader

logger = logging.getLogger(__name__)

# u64, little-endian
_LENGTH_PREFIX = struct.Struct("<Q")


class SafetensorsReader(IHeaderReader):
    """
    Reads only the header, never the tensor payload,
    so multi-GB checkpoints cost a couple of small reads.
    """

    def __init__(self, max_header_bytes: int = settings.MAX_HEADER_BYTES):
        self.max_header_bytes = max_header_bytes

    def read_header(self, path: Path) -> SafetensorsHeader:
        file_size = path.stat().st_size

        with open(path, "rb") as f:
            # 1. Length prefix
            prefix = f.read(_LENGTH_PREFIX.size)
            if len(prefix) < _LENGTH_PREFIX.size:
                raise SafetensorsFormatError(path, f"file is {file_size} bytes, too small for a header")
            (header_size,) = _LENGTH_PREFIX.unpack(prefix)

            if header_size > self.max_header_bytes:
                raise SafetensorsFormatError(path, f"header of {header_size} bytes exceeds limit of {self.max_header_bytes}")
            if header_size > file_size - _LENGTH_PREFIX.size:
                raise SafetensorsFormatError(path, f"header of {header_size} bytes runs past end of file")

            # 2. JSON body
            raw = f.read(header_size)

        try:
            entries = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise SafetensorsFormatError(path, f"header is not UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise SafetensorsFormatError(path, f"header is not valid JSON: {e}") from e

        if not isinstance(entries, dict):
            raise SafetensorsFormatError(path, "header is not a JSON object")

        return SafetensorsHeader(path=path, header_size=header_size, entries=entries)


def expand_json_values(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """
    Training tools store nested structures as JSON text inside the
    string-to-string metadata map. Decode those back into objects/arrays.
    """
    expanded = {}
    for key, value in metadata.items():
        if isinstance(value, str) and value.strip()[:1] in ("{", "["):
            try:
                expanded[key] = json.loads(value)
                continue
            except json.JSONDecodeError:
                logger.debug(f"Metadata key {key!r} looks like JSON but is not; keeping text")
        expanded[key] = value
    return expanded
