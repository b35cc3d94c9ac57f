import os
import logging
from pathlib import Path
from typing import Any, Callable, Union

from extract_metadata.core.common.enums import DispatchMode, FileOutcome
from extract_metadata.core.errors import InvalidPathError, NormalizationError
from extract_metadata.features.path_normalizer.service.api import normalize_path
from extract_metadata.features.directory_walker.data.file_walker import LocalFileWalker
from extract_metadata.features.directory_walker.domain.interfaces import IFileWalker
from extract_metadata.features.directory_walker.domain.models import ExtensionFilter
from extract_metadata.features.glob_dispatcher.data.pattern import has_wildcard
from extract_metadata.features.glob_dispatcher.service.api import GlobDispatcher

from ..domain.interfaces import IFileHandler
from ..domain.models import DispatchSummary

logger = logging.getLogger(__name__)

Handler = Union[IFileHandler, Callable[[Path], Any]]


class ContinueOnErrorHandler:
    """
    Wraps a handler so that one bad file never stops a batch.
    Handler failures become warnings in the log and in the summary.
    """

    def __init__(self, handler: Handler, summary: DispatchSummary, normalize: bool = False):
        self.handler = handler.handle if isinstance(handler, IFileHandler) else handler
        self.summary = summary
        self.normalize = normalize

    def __call__(self, path: Path) -> None:
        # 1. Candidates from a directory walk are normalized one by one
        if self.normalize:
            try:
                path = normalize_path(path)
            except NormalizationError as e:
                message = f"Failed to normalize path {path}: {e}"
                logger.warning(message)
                self.summary.record_skip(message)
                return

        # 2. Any failure stays local to this file
        try:
            self.handler(path)
        except Exception as e:
            message = f"Failed to process file {path}: {e}"
            logger.warning(message)
            self.summary.record(FileOutcome.FAILED, message)
            return

        self.summary.record(FileOutcome.PROCESSED)


class Orchestrator:
    """
    Classifies a single input (directory / glob pattern / file)
    and routes it to the matching component.
    """

    def __init__(self, walker: IFileWalker = None, glob_dispatcher: GlobDispatcher = None):
        self.walker = walker or LocalFileWalker()
        self.glob_dispatcher = glob_dispatcher or GlobDispatcher()

    def dispatch(self, raw_input: Union[str, os.PathLike], extension: Union[str, ExtensionFilter],
                 handler: Handler) -> DispatchSummary:
        """
        Structural errors (NormalizationError, WalkError, GlobSyntaxError,
        InvalidPathError) propagate. Per-file failures only land in the summary.
        """
        raw = os.fspath(raw_input)
        extension = ExtensionFilter.of(extension)
        summary = DispatchSummary()

        # 1. Normalize the input itself
        path = normalize_path(raw)

        # 2. Directory tree
        if os.path.isdir(path):
            summary.mode = DispatchMode.DIRECTORY
            logger.info(f"Walking directory {path} for *.{extension.extension} files")
            wrapped = ContinueOnErrorHandler(handler, summary, normalize=True)
            self.walker.walk(path, extension, wrapped)

        # 3. Wildcard pattern, expanded from the raw text
        elif has_wildcard(raw):
            summary.mode = DispatchMode.GLOB
            self._ensure_utf8(raw)
            logger.info(f"Expanding glob pattern {raw!r}")
            wrapped = ContinueOnErrorHandler(handler, summary)
            self.glob_dispatcher.dispatch(raw, wrapped, on_skip=summary.record_skip)

        # 4. Single file
        else:
            summary.mode = DispatchMode.SINGLE_FILE
            self._ensure_utf8(str(path))
            ContinueOnErrorHandler(handler, summary)(path)

        logger.info(
            f"Dispatch complete ({summary.mode.value}). Processed {summary.files_processed}/"
            f"{summary.files_found} file(s), {summary.files_failed} failed, {summary.files_skipped} skipped."
        )
        return summary

    @staticmethod
    def _ensure_utf8(text: str) -> None:
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidPathError(f"Invalid path provided: {text!r} is not valid UTF-8") from e
