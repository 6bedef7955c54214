"""
Reconciliation driver.

Runs the header codec over a batch of selected files, either reporting
(check mode) or rewriting (fix mode). Files are processed one at a time;
a failure on one file is recorded in its result and never stops the batch.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from spdxtool.core.comment_syntax import CommentSyntaxTable, get_default_table
from spdxtool.core.file_selector import FileTarget
from spdxtool.core.header_codec import (
    HeaderFields,
    HeaderState,
    HeaderStatus,
    classify,
    read_source,
    rewrite,
    write_source,
)

logger = logging.getLogger(__name__)


class ReconcileMode(str, Enum):
    """Report-only or mutating run."""

    CHECK = "check"
    FIX = "fix"


@dataclass
class ProcessResult:
    """
    Outcome for one file.

    Attributes:
        path: File path
        header_was_missing: True if the header was absent or stale
        was_modified: True if the file was rewritten
        state: Header state before processing (None if unreadable)
        error: Error message if reading or writing failed
    """

    path: Path
    header_was_missing: bool = False
    was_modified: bool = False
    state: Optional[HeaderState] = None
    error: Optional[str] = None


@dataclass
class ReconcileSummary:
    """Aggregate of a reconciliation run."""

    mode: ReconcileMode
    results: list[ProcessResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def needs_header(self) -> int:
        return sum(1 for r in self.results if r.header_was_missing)

    @property
    def modified(self) -> int:
        return sum(1 for r in self.results if r.was_modified)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.error is not None)

    @property
    def failed_files(self) -> list[ProcessResult]:
        return [r for r in self.results if r.error is not None]


class ReconciliationDriver:
    """Applies check or fix semantics to a sequence of FileTargets."""

    def __init__(
        self,
        fields: HeaderFields,
        syntax_table: Optional[CommentSyntaxTable] = None,
        on_result: Optional[Callable[[ProcessResult], None]] = None,
    ):
        """
        Initialize the driver.

        Args:
            fields: Resolved header values
            syntax_table: Comment syntax table (default table if None)
            on_result: Callback invoked after each file is processed
        """
        self._fields = fields
        self._syntax_table = syntax_table or get_default_table()
        self._on_result = on_result

    def process(self, target: FileTarget, mode: ReconcileMode) -> ProcessResult:
        """Process a single file."""
        result = ProcessResult(path=target.path)
        spec = self._fields.spec_for(target.extension, self._syntax_table)

        read = read_source(target.path)
        if not read.ok:
            result.error = read.error_message
            return result

        content = read.content or ""
        state = classify(content, spec)
        result.state = state

        if state.status is HeaderStatus.MATCHES:
            return result

        result.header_was_missing = True

        if mode is ReconcileMode.CHECK:
            logger.debug(f"Header {state.status.value}: {target.path}")
            return result

        error = write_source(target.path, rewrite(content, spec))
        if error is not None:
            result.error = error
            return result

        result.was_modified = True
        if state.status is HeaderStatus.STALE:
            logger.info(f"Replaced stale header in {target.path}: {state.old_lines[0]!r}")
        else:
            logger.info(f"Added header to {target.path}")
        return result

    def run(self, targets: Iterable[FileTarget], mode: ReconcileMode) -> ReconcileSummary:
        """
        Process every target sequentially.

        Returns:
            Summary of all per-file results
        """
        summary = ReconcileSummary(mode=mode)
        for target in targets:
            result = self.process(target, mode)
            summary.results.append(result)
            if self._on_result is not None:
                self._on_result(result)

        logger.debug(
            f"{mode.value}: {summary.total} files, {summary.needs_header} need header, "
            f"{summary.modified} modified, {summary.errors} errors"
        )
        return summary


def run(
    targets: Iterable[FileTarget],
    fields: HeaderFields,
    mode: ReconcileMode,
    syntax_table: Optional[CommentSyntaxTable] = None,
    on_result: Optional[Callable[[ProcessResult], None]] = None,
) -> ReconcileSummary:
    """Convenience wrapper around ``ReconciliationDriver.run``."""
    return ReconciliationDriver(fields, syntax_table, on_result).run(targets, mode)
