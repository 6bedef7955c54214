"""
On-disk cache for license catalog JSON documents.

The cache lives in a per-user cache directory (by default
``$XDG_CACHE_HOME/spdxtool`` or ``~/.cache/spdxtool``). Point
``SPDXTOOL_CATALOG_CACHE_DIR`` at a pre-populated directory to work offline.

Caching is best-effort: a failed write never breaks the current run.
"""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CACHE_DIR_NAME = "spdxtool"


def get_default_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the default per-user cache directory.

    Honors XDG_CACHE_HOME, falling back to ``~/.cache``.
    """
    env = os.environ if environ is None else environ
    xdg = env.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg).expanduser() / CACHE_DIR_NAME
    return Path.home() / ".cache" / CACHE_DIR_NAME


class CatalogCache:
    """JSON document cache keyed by relative file name."""

    def __init__(self, directory: Path | str):
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, name: str) -> Path:
        return self._directory / name

    def read(self, name: str) -> Optional[dict[str, Any]]:
        """
        Read a cached document.

        Returns:
            The decoded JSON object, or None on a miss or corrupt entry.
        """
        path = self._path_for(name)
        if not path.is_file():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed cache entry {path}")
            return None
        logger.debug(f"Cache hit: {path}")
        return data

    def write(self, name: str, data: dict[str, Any]) -> bool:
        """
        Persist a document.

        Returns:
            True if written, False if the write failed (failure is logged only).
        """
        path = self._path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            logger.debug(f"Could not write cache entry {path}: {e}")
            return False
        return True
