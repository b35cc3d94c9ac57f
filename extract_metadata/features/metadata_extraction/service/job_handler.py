import json
import logging
from pathlib import Path

from extract_metadata.core.config.settings import settings
from extract_metadata.features.dispatch.domain.interfaces import IFileHandler

from ..data.safetensors_reader import SafetensorsReader, expand_json_values
from ..domain.interfaces import IHeaderReader
from ..domain.models import MetadataResult

logger = logging.getLogger(__name__)

class MetadataExtractionHandler(IFileHandler):
    """
    Worker for a single .safetensors file.
    Writes the decoded '__metadata__' map next to the input:
    /models/lora.safetensors -> /models/lora.json
    """

    def __init__(self, reader: IHeaderReader = None):
        self.reader = reader or SafetensorsReader()

    def handle(self, path: Path) -> MetadataResult:
        logger.info(f"Extracting metadata from: {path}")

        # 1. Parse header
        header = self.reader.read_header(path)

        # 2. Decode nested JSON values
        metadata = expand_json_values(header.raw_metadata)

        # 3. Persist beside the source file
        output_path = path.with_suffix(settings.METADATA_OUTPUT_SUFFIX)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, ensure_ascii=False)
            f.write("\n")

        logger.info(f"Wrote {len(metadata)} metadata key(s) to {output_path}")
        return MetadataResult(
            source_path=path,
            output_path=output_path,
            keys_written=len(metadata),
            tensor_count=header.tensor_count,
        )
