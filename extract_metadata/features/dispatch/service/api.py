import os
from typing import Union

from extract_metadata.features.directory_walker.domain.models import ExtensionFilter

from ..domain.models import DispatchSummary
from .orchestrator import Handler, Orchestrator

# Singleton Instance for easy import
orchestrator = Orchestrator()


def dispatch(raw_input: Union[str, os.PathLike], extension: Union[str, ExtensionFilter],
             handler: Handler) -> DispatchSummary:
    """
    extension may be a plain string ("safetensors") or an ExtensionFilter.
    """
    return orchestrator.dispatch(raw_input, extension, handler)
