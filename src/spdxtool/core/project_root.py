"""
Project root detection.

Walks upward from a starting directory until a directory containing a
version-control metadata directory or a known build manifest is found.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

VCS_DIRECTORIES = frozenset([
    ".git",
    ".hg",
    ".svn",
    ".jj",
])

BUILD_MANIFESTS = frozenset([
    # Clojure
    "deps.edn",
    "project.clj",
    "bb.edn",
    "shadow-cljs.edn",
    "build.boot",
    # JVM
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
    "build.sbt",
    # Other ecosystems
    "package.json",
    "pyproject.toml",
    "setup.py",
    "Cargo.toml",
    "go.mod",
    "mix.exs",
    "Gemfile",
    "flake.nix",
])


def is_project_root(directory: Path) -> bool:
    """Check if a directory carries VCS metadata or a build manifest."""
    for name in VCS_DIRECTORIES:
        if (directory / name).is_dir():
            return True
    for name in BUILD_MANIFESTS:
        if (directory / name).is_file():
            return True
    return False


def find_project_root(start: Path) -> Optional[Path]:
    """
    Find the nearest project root at or above ``start``.

    Args:
        start: Directory to start from

    Returns:
        The project root, or None if no ancestor qualifies.
    """
    try:
        current = Path(start).resolve()
    except (OSError, RuntimeError) as e:
        logger.warning(f"Cannot resolve {start}: {e}")
        return None

    for directory in (current, *current.parents):
        if is_project_root(directory):
            logger.debug(f"Project root detected: {directory}")
            return directory

    logger.debug(f"No project root found above {current}")
    return None


@dataclass(frozen=True)
class ProjectContext:
    """
    Where the tool runs.

    Attributes:
        cwd: Working directory of the invocation
        project_root: Detected project root, or None
    """

    cwd: Path
    project_root: Optional[Path] = None

    @property
    def root_or_cwd(self) -> Path:
        """The project root when detected, else the working directory."""
        return self.project_root if self.project_root is not None else self.cwd

    @property
    def base_dir(self) -> Path:
        """Directory that exclusion patterns are relative to."""
        return self.cwd


def detect_project_context(cwd: Path) -> ProjectContext:
    """Build the project context for a working directory."""
    cwd = Path(cwd).resolve()
    return ProjectContext(cwd=cwd, project_root=find_project_root(cwd))
