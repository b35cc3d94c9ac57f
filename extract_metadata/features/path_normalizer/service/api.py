from pathlib import Path, PurePath
from typing import Union

from ..data.normalizer import LocalPathNormalizer

# Singleton Instance for easy import
normalizer = LocalPathNormalizer()


def normalize_path(path: Union[str, PurePath]) -> Path:
    """
    Public entry point of the PathNormalizer feature.
    """
    return normalizer.normalize(path)
