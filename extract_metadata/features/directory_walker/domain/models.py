from dataclasses import dataclass
from pathlib import PurePath

@dataclass(frozen=True)
class ExtensionFilter:
    """
    Exact, case-sensitive match on the text after the last dot of a file name.
    'model.safetensors.txt' has extension 'txt'; '.safetensors' has none.
    """
    extension: str

    def __post_init__(self):
        # Accept ".safetensors" as well as "safetensors"
        if self.extension.startswith("."):
            object.__setattr__(self, "extension", self.extension[1:])
        if not self.extension:
            raise ValueError("Extension filter cannot be empty.")

    @classmethod
    def of(cls, value) -> "ExtensionFilter":
        return value if isinstance(value, cls) else cls(str(value))

    def matches(self, path: PurePath) -> bool:
        suffix = PurePath(path).suffix
        return bool(suffix) and suffix[1:] == self.extension
