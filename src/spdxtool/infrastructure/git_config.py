"""
Git configuration reader.

Best-effort lookups of ``git config`` values; a missing git binary or an
unset key yields None.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def read_git_config(key: str, cwd: Path) -> Optional[str]:
    """
    Read a git configuration value.

    Args:
        key: Configuration key, e.g. ``user.name``
        cwd: Directory to run git in (repository config applies when inside one)

    Returns:
        The stripped value, or None if unavailable.
    """
    try:
        result = subprocess.run(
            ["git", "config", "--get", key],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"git config {key} unavailable: {e}")
        return None

    if result.returncode != 0:
        return None

    value = result.stdout.strip()
    return value or None


def read_git_user_name(cwd: Path) -> Optional[str]:
    """Return ``user.name`` from git configuration."""
    return read_git_config("user.name", cwd)


def read_git_homepage(cwd: Path) -> Optional[str]:
    """
    Return the ``remote.origin.url`` when it is an http(s) URL.

    A trailing ``.git`` is dropped so the URL points at the project page.
    """
    url = read_git_config("remote.origin.url", cwd)
    if not url or not url.startswith(("http://", "https://")):
        return None
    return url[: -len(".git")] if url.endswith(".git") else url
