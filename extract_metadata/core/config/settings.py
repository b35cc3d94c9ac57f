# File: extract_metadata/core/config/settings.py

import os


class Settings:
    # --- Logging ---
    # Standard verbosity switch (DEBUG, INFO, WARNING, ERROR)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"

    # --- Dispatch ---
    DEFAULT_EXTENSION: str = "safetensors"

    # --- Safetensors ---
    # The format caps the JSON header at 100MB
    MAX_HEADER_BYTES: int = 100_000_000
    METADATA_OUTPUT_SUFFIX: str = ".json"


settings = Settings()
