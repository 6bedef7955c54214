"""
Exclusion resolution combining .gitignore patterns with user excludes.

Patterns are evaluated in order (gitignore first, then user-supplied) and
the first match excludes the path. There is no precedence or negation
handling.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from spdxtool.core.pattern_matcher import matches

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


def load_gitignore_patterns(base_dir: Path) -> list[str]:
    """
    Load patterns from the .gitignore file in ``base_dir``.

    Blank lines and ``#`` comments are skipped. A missing or unreadable file
    yields no patterns.

    Args:
        base_dir: Directory containing the .gitignore file

    Returns:
        Patterns in file order
    """
    gitignore_path = Path(base_dir) / GITIGNORE_FILENAME

    if not gitignore_path.is_file():
        logger.debug(f"Gitignore file not found: {gitignore_path}")
        return []

    try:
        content = gitignore_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Invalid UTF-8 encoding in {gitignore_path}: {e}")
        return []
    except OSError as e:
        logger.warning(f"Error reading {gitignore_path}: {e}")
        return []

    patterns = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)

    logger.debug(f"Loaded {len(patterns)} patterns from {gitignore_path}")
    return patterns


def relative_posix_path(path: Path, base_dir: Path) -> str:
    """
    Relativize ``path`` against ``base_dir`` using forward slashes.

    Paths outside ``base_dir`` are expressed with ``..`` segments.
    """
    return Path(os.path.relpath(Path(path), Path(base_dir))).as_posix()


@dataclass(frozen=True)
class ExclusionRuleSet:
    """
    Ordered exclusion patterns scoped to one base directory.

    Attributes:
        base_dir: Directory that relative paths are computed against
        patterns: Gitignore-derived patterns followed by user patterns
    """

    base_dir: Path
    patterns: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_base_dir(
        cls, base_dir: Path, extra_patterns: list[str] | tuple[str, ...] | None = None
    ) -> "ExclusionRuleSet":
        """Build a rule set from ``base_dir/.gitignore`` plus ``extra_patterns``."""
        base_dir = Path(base_dir).resolve()
        patterns = load_gitignore_patterns(base_dir) + list(extra_patterns or [])
        return cls(base_dir=base_dir, patterns=tuple(patterns))

    def first_match(self, path: Path) -> str | None:
        """Return the first pattern that matches ``path``, if any."""
        rel_path = relative_posix_path(path, self.base_dir)
        for pattern in self.patterns:
            if matches(rel_path, pattern):
                return pattern
        return None

    def is_excluded(self, path: Path) -> bool:
        """Check if ``path`` is excluded by any pattern."""
        pattern = self.first_match(path)
        if pattern is not None:
            logger.debug(f"Excluding {path} (pattern '{pattern}')")
            return True
        return False


def is_excluded(path: Path, base_dir: Path, extra_patterns: list[str] | None = None) -> bool:
    """
    Decide whether ``path`` is excluded relative to ``base_dir``.

    Reads ``base_dir/.gitignore`` on every call; build an
    ``ExclusionRuleSet`` once when checking many paths.
    """
    return ExclusionRuleSet.from_base_dir(base_dir, extra_patterns).is_excluded(path)
