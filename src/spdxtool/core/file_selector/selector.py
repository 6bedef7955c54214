"""
File selection: expand input paths, filter by extension and exclusions,
and drop files whose header already matches.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from spdxtool.core.comment_syntax import CommentSyntaxTable, get_default_table
from spdxtool.core.exclusion import ExclusionRuleSet
from spdxtool.core.header_codec import HeaderFields, HeaderStatus, classify_file

from .models import FileTarget, extension_of

logger = logging.getLogger(__name__)


def walk_files(root: Path, extensions: set[str]) -> Iterator[Path]:
    """
    Yield files under ``root`` whose extension is in ``extensions``.

    Uses an explicit stack of pending directories. Symlinked directories are
    not descended into and symlinked files are not yielded. Entries are
    visited in name order.

    Args:
        root: Directory to walk
        extensions: Extensions without the leading dot, matched case-sensitively
    """
    pending: list[Path] = [root]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError as e:
            logger.warning(f"Permission denied accessing directory: {current} - {e}")
            continue
        except OSError as e:
            logger.warning(f"Error accessing directory: {current} - {e}")
            continue

        subdirs: list[Path] = []
        for entry in entries:
            entry_path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry_path)
                elif entry.is_file(follow_symlinks=False) and extension_of(entry_path) in extensions:
                    yield entry_path
            except OSError as e:
                logger.warning(f"Error inspecting {entry_path} - {e}")

        # Reversed so the stack pops subdirectories in name order
        pending.extend(reversed(subdirs))


class FileSelector:
    """
    Selects the files that need header reconciliation.

    Directories are expanded recursively and filtered by extension; explicit
    file paths are taken as-is regardless of extension. The result is then
    filtered through the exclusion rules and files whose header already
    matches are dropped. The result is sorted by path.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        exclusion: ExclusionRuleSet,
        fields: HeaderFields,
        cwd: Path,
        syntax_table: CommentSyntaxTable | None = None,
    ):
        """
        Initialize the selector.

        Args:
            extensions: Extensions to collect from directories (without dot)
            exclusion: Exclusion rules to apply
            fields: Header values used to detect already-matching files
            cwd: Directory that relative input paths are resolved against
            syntax_table: Comment syntax table (default table if None)
        """
        self._extensions = {ext.lstrip(".") for ext in extensions}
        self._exclusion = exclusion
        self._fields = fields
        self._cwd = Path(cwd)
        self._syntax_table = syntax_table or get_default_table()

    def expand(self, target_paths: Iterable[Path | str]) -> list[Path]:
        """Expand input paths into a flat list of absolute file paths."""
        expanded: list[Path] = []
        for raw in target_paths:
            path = (self._cwd / Path(raw)).resolve()
            if path.is_dir():
                expanded.extend(walk_files(path, self._extensions))
            elif path.exists():
                expanded.append(path)
            else:
                logger.warning(f"Path does not exist: {path}")
        return expanded

    def _already_matches(self, target: FileTarget) -> bool:
        spec = self._fields.spec_for(target.extension, self._syntax_table)
        state, error = classify_file(target.path, spec)
        if error is not None:
            # Unreadable files stay selected so the failure is reported
            return False
        return state is not None and state.status is HeaderStatus.MATCHES

    def select(self, target_paths: Iterable[Path | str]) -> list[FileTarget]:
        """
        Select files needing a header from the given input paths.

        Args:
            target_paths: Files and/or directories, absolute or relative to cwd

        Returns:
            FileTargets sorted by path
        """
        selected: list[FileTarget] = []
        seen: set[Path] = set()

        for path in self.expand(target_paths):
            if path in seen:
                continue
            seen.add(path)

            if path.is_dir():
                continue
            if self._exclusion.is_excluded(path):
                continue

            target = FileTarget.from_path(path)
            if self._already_matches(target):
                logger.debug(f"Header already matches: {path}")
                continue
            selected.append(target)

        selected.sort(key=lambda t: str(t.path))
        logger.debug(f"Selected {len(selected)} files for header reconciliation")
        return selected


def select_files(
    target_paths: Iterable[Path | str],
    extensions: Iterable[str],
    exclusion: ExclusionRuleSet,
    fields: HeaderFields,
    cwd: Path,
    syntax_table: CommentSyntaxTable | None = None,
) -> list[FileTarget]:
    """Convenience wrapper around ``FileSelector.select``."""
    selector = FileSelector(extensions, exclusion, fields, cwd, syntax_table)
    return selector.select(target_paths)
