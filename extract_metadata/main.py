# File: extract_metadata/main.py

"""
Command line entry point:

    extract-metadata <filename | directory | glob pattern>

Exit code is 0 whenever the run completes, even if single files failed,
and 1 when the run itself cannot proceed.
"""
import argparse
import logging
import sys
from typing import List, Optional

from extract_metadata.core.config.settings import settings
from extract_metadata.core.errors import StructuralError
from extract_metadata.core.logging import configure_logging
from extract_metadata.features.dispatch.service.api import dispatch
from extract_metadata.features.metadata_extraction.service.job_handler import MetadataExtractionHandler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extract-metadata",
        description=f"Extract metadata from .{settings.DEFAULT_EXTENSION} files into JSON files next to them.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        metavar="<filename | directory | glob pattern>",
        help="a single file, a directory (searched recursively) or a quoted glob pattern",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # No input is not an error
    if args.path is None:
        parser.print_usage(sys.stdout)
        return 0

    configure_logging()

    try:
        summary = dispatch(args.path, settings.DEFAULT_EXTENSION, MetadataExtractionHandler())
    except StructuralError as e:
        logger.error(str(e))
        return 1

    if summary.files_failed or summary.files_skipped:
        logger.warning(
            f"{summary.files_failed} file(s) failed and {summary.files_skipped} skipped "
            f"out of {summary.files_found + summary.files_skipped}"
        )
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
