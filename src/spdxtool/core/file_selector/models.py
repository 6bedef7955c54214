"""
Data models for the file selector module.
"""

from dataclasses import dataclass
from pathlib import Path


def extension_of(path: Path) -> str:
    """
    Return the case-sensitive suffix after the final ``.`` of a file name.

    Names without a dot have an empty extension.
    """
    _, dot, suffix = Path(path).name.rpartition(".")
    return suffix if dot else ""


@dataclass(frozen=True)
class FileTarget:
    """
    A candidate file for header reconciliation.

    Attributes:
        path: Absolute path to the file
        extension: Extension used to pick the comment prefix
    """

    path: Path
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> "FileTarget":
        return cls(path=Path(path), extension=extension_of(path))
