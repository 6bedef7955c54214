"""
Loose gitignore-style pattern matching for relative paths.

This is a practical subset of gitignore semantics, not a full matcher:

- Blank and ``#`` comment patterns never match.
- Patterns ending in ``/`` match when the pattern (minus the slash) occurs
  anywhere in the path, so ``build/`` also matches ``my-build/file``.
- Patterns containing ``*`` or ``?`` are compiled to a regular expression
  anchored at the end of the path only, so they match a path suffix.
- Any other pattern must equal the relative path exactly.
- Negation (``!``) is not supported.
"""

import functools
import logging
import re

logger = logging.getLogger(__name__)

_WILDCARDS = ("*", "?")


@functools.lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str] | None:
    """
    Compile a wildcard pattern into an end-anchored regular expression.

    Only ``.`` is escaped; ``*`` becomes ``.*`` and ``?`` becomes ``.``.
    Returns None if the resulting expression is not valid.
    """
    expression = pattern.replace(".", r"\.").replace("*", ".*").replace("?", ".")
    try:
        return re.compile(expression + "$")
    except re.error as e:
        logger.warning(f"Ignoring invalid pattern '{pattern}': {e}")
        return None


def is_wildcard_pattern(pattern: str) -> bool:
    """Return True if the pattern contains a glob wildcard."""
    return any(ch in pattern for ch in _WILDCARDS)


def matches(relative_path: str, pattern: str) -> bool:
    """
    Check whether a relative path matches a single pattern.

    Args:
        relative_path: Path relative to the exclusion base directory,
            using forward slashes.
        pattern: A gitignore-style pattern.

    Returns:
        True if the pattern matches the path.
    """
    if not pattern.strip() or pattern.startswith("#"):
        return False

    if pattern.endswith("/"):
        return pattern[:-1] in relative_path

    if is_wildcard_pattern(pattern):
        compiled = _compile_glob(pattern)
        return compiled is not None and compiled.search(relative_path) is not None

    return relative_path == pattern
