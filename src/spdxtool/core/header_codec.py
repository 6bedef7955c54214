"""
Header codec: render, classify and rewrite two-line copyright/SPDX headers.

A header is two line comments at the top of a file (after a shebang line,
if present):

    <prefix> Copyright © <year> <copyright>
    <prefix> SPDX-License-Identifier: <spdx id>

Classification and rewriting are pure functions of the file content and a
``HeaderSpec``. ``read_source`` and ``write_source`` wrap the file I/O and
report failures as values instead of raising.
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from spdxtool.core.comment_syntax import CommentSyntaxTable, get_default_table

logger = logging.getLogger(__name__)

SHEBANG = "#!"
COPYRIGHT_MARKER = "Copyright"
SPDX_MARKER = "SPDX-License-Identifier"


@dataclass(frozen=True)
class HeaderFields:
    """
    Resolved header values shared by every file in one invocation.

    Attributes:
        copyright: Copyright holder text
        year: Four-digit copyright year
        spdx_id: SPDX license identifier
    """

    copyright: str
    year: str
    spdx_id: str

    def spec_for(
        self, extension: str, table: CommentSyntaxTable | None = None
    ) -> "HeaderSpec":
        """Build the header spec for a file extension."""
        syntax = table or get_default_table()
        return HeaderSpec(
            copyright=self.copyright,
            year=self.year,
            spdx_id=self.spdx_id,
            comment_prefix=syntax.prefix_for(extension),
        )


@dataclass(frozen=True)
class HeaderSpec:
    """Expected header for one language."""

    copyright: str
    year: str
    spdx_id: str
    comment_prefix: str

    @property
    def lines(self) -> tuple[str, str]:
        """The two expected header lines, without newlines."""
        return (
            f"{self.comment_prefix} {COPYRIGHT_MARKER} © {self.year} {self.copyright}",
            f"{self.comment_prefix} {SPDX_MARKER}: {self.spdx_id}",
        )


class HeaderStatus(str, Enum):
    """Header state of a file relative to a HeaderSpec."""

    ABSENT = "absent"
    MATCHES = "matches"
    STALE = "stale"


@dataclass(frozen=True)
class HeaderState:
    """
    Classification result.

    ``old_lines`` holds the replaced candidate lines for STALE headers and
    is empty otherwise.
    """

    status: HeaderStatus
    old_lines: tuple[str, ...] = ()

    @classmethod
    def absent(cls) -> "HeaderState":
        return cls(HeaderStatus.ABSENT)

    @classmethod
    def matching(cls) -> "HeaderState":
        return cls(HeaderStatus.MATCHES)

    @classmethod
    def stale(cls, old_line1: str, old_line2: str) -> "HeaderState":
        return cls(HeaderStatus.STALE, (old_line1, old_line2))

    @property
    def needs_header(self) -> bool:
        return self.status is not HeaderStatus.MATCHES


def render(spec: HeaderSpec) -> str:
    """Render the two header lines, each terminated by a newline."""
    line1, line2 = spec.lines
    return f"{line1}\n{line2}\n"


def _header_offset(lines: list[str]) -> int:
    """Index of the first header line: 1 after a shebang, else 0."""
    return 1 if lines and lines[0].startswith(SHEBANG) else 0


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def _line_suffix(lines: list[str]) -> str:
    """Carriage return to append to inserted lines when the file uses CRLF."""
    return "\r" if len(lines) > 1 and lines[0].endswith("\r") else ""


def _looks_like_header(line1: str, line2: str, prefix: str) -> bool:
    return (
        COPYRIGHT_MARKER in line1
        and prefix in line1
        and SPDX_MARKER in line2
        and prefix in line2
    )


def classify(content: str, spec: HeaderSpec) -> HeaderState:
    """
    Classify the header state of file content.

    Args:
        content: Full file content
        spec: Expected header

    Returns:
        MATCHES if the candidate lines equal the expected lines, STALE if they
        carry the copyright and SPDX markers with the expected prefix, and
        ABSENT otherwise.
    """
    lines = content.split("\n")
    offset = _header_offset(lines)

    if len(lines) < offset + 2:
        return HeaderState.absent()

    # A trailing CR belongs to the line ending, not the header text
    line1, line2 = _strip_cr(lines[offset]), _strip_cr(lines[offset + 1])

    if (line1, line2) == spec.lines:
        return HeaderState.matching()

    if _looks_like_header(line1, line2, spec.comment_prefix):
        return HeaderState.stale(line1, line2)

    return HeaderState.absent()


def rewrite(content: str, spec: HeaderSpec) -> str:
    """
    Return ``content`` with the expected header inserted or replaced.

    The shebang line, if any, stays first. Stale header lines are replaced;
    otherwise the header is inserted above the existing content. Content
    that already matches is returned unchanged. Inserted lines end in CRLF
    when the first line of the file does.
    """
    state = classify(content, spec)
    if state.status is HeaderStatus.MATCHES:
        return content

    lines = content.split("\n")
    offset = _header_offset(lines)
    removed = 2 if state.status is HeaderStatus.STALE else 0

    suffix = _line_suffix(lines)
    header = [line + suffix for line in spec.lines]
    new_lines = lines[:offset] + header + lines[offset + removed:]
    return "\n".join(new_lines)


@dataclass
class SourceReadResult:
    """
    Result of reading a source file.

    Attributes:
        content: File content, or None if reading failed.
        error_message: Human-readable error message if reading failed.
    """

    content: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_message is None


def read_source(path: Path) -> SourceReadResult:
    """Read a file as UTF-8, preserving its line endings."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return SourceReadResult(content=handle.read())
    except UnicodeDecodeError as e:
        logger.warning(f"Failed to decode file as UTF-8: {path} - {e}")
        return SourceReadResult(error_message=f"not valid UTF-8: {e}")
    except OSError as e:
        logger.warning(f"Error reading file: {path} - {e}")
        return SourceReadResult(error_message=str(e))


def write_source(path: Path, content: str) -> str | None:
    """
    Replace a file's content in one step.

    The content is written to a temporary file next to ``path`` and moved
    over it, so an interrupted run never leaves a truncated file. The
    original file mode is kept. A symlink is followed so its target is
    rewritten and the link itself stays in place.

    Returns:
        None on success, otherwise an error message.
    """
    tmp_name: str | None = None
    try:
        path = Path(path).resolve(strict=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, RuntimeError) as e:
        logger.warning(f"Error writing file: {path} - {e}")
        return str(e)
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    return None


def classify_file(path: Path, spec: HeaderSpec) -> tuple[HeaderState | None, str | None]:
    """
    Read and classify a file.

    Returns:
        ``(state, None)`` on success or ``(None, error_message)`` if the file
        could not be read.
    """
    read = read_source(path)
    if not read.ok:
        return None, read.error_message
    return classify(read.content or "", spec), None
