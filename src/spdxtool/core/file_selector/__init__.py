"""
File selector module for spdxtool.

Provides recursive, extension-filtered directory expansion with gitignore
and user exclusions, feeding the header reconciliation driver.
"""

from .models import FileTarget, extension_of
from .selector import FileSelector, select_files, walk_files

__all__ = [
    "FileSelector",
    "FileTarget",
    "extension_of",
    "select_files",
    "walk_files",
]
