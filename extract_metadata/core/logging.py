# File: extract_metadata/core/logging.py

import logging
import sys

from extract_metadata.core.config.settings import settings


def configure_logging(level: str = None) -> None:
    """
    Sends all diagnostics to stderr so stdout stays free for usage text.
    Falls back to WARNING if the configured level name is unknown.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(
        level=numeric_level,
        format=settings.LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
