"""
Comment-syntax table mapping file extensions to line-comment prefixes.
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default path to the comment syntax configuration file
_DEFAULT_COMMENT_SYNTAX_CONFIG = Path(__file__).parent / "comment_syntax.yaml"

FALLBACK_PREFIX = ";;"


class CommentSyntaxTable:
    """
    Static mapping from file extension to the line-comment prefix of its language.

    Extensions are stored without the leading dot and looked up
    case-sensitively. Unknown extensions resolve to ``FALLBACK_PREFIX``.

    Example:
        >>> table = CommentSyntaxTable()
        >>> table.prefix_for("py")
        '#'
        >>> table.prefix_for("unknown")
        ';;'
    """

    def __init__(self, load_defaults: bool = True, fallback: str = FALLBACK_PREFIX):
        """
        Initialize the table.

        Args:
            load_defaults: If True, load the packaged comment_syntax.yaml mappings.
            fallback: Prefix returned for unregistered extensions.
        """
        self._prefixes: dict[str, str] = {}
        self._fallback = fallback

        if load_defaults:
            self._load_from_yaml(_DEFAULT_COMMENT_SYNTAX_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "CommentSyntaxTable":
        """
        Create a table from a YAML configuration file.

        Raises:
            ValueError: If the config file format is invalid
        """
        table = cls(load_defaults=False)
        table._load_from_yaml(Path(config_path))
        return table

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load prefix mappings from a YAML file.

        Expected format:
            language_name:
              prefix: "//"
              extensions: [ext1, ext2]
        """
        if not config_path.exists():
            logger.warning(f"Comment syntax config not found: {config_path}, using empty table")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse comment syntax config: {e}")
            raise ValueError(f"Invalid YAML in comment syntax config: {e}") from e

        if data is None:
            return

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid comment syntax config format: expected dict, got {type(data)}"
            )

        for language, entry in data.items():
            if not isinstance(entry, dict) or "prefix" not in entry:
                logger.warning(f"Invalid entry for {language}: expected mapping with a prefix")
                continue
            extensions = entry.get("extensions") or []
            if not isinstance(extensions, list):
                logger.warning(
                    f"Invalid extensions for {language}: expected list, got {type(extensions)}"
                )
                continue
            self.register(str(entry["prefix"]), [str(ext) for ext in extensions])

    def register(self, prefix: str, extensions: list[str]) -> "CommentSyntaxTable":
        """Register extensions (with or without a leading dot) for a prefix."""
        for ext in extensions:
            self._prefixes[ext.lstrip(".")] = prefix
        return self

    def prefix_for(self, extension: str) -> str:
        """Return the line-comment prefix for an extension, or the fallback prefix."""
        return self._prefixes.get(extension, self._fallback)

    def is_known(self, extension: str) -> bool:
        """Check if an extension is registered."""
        return extension in self._prefixes

    @property
    def fallback(self) -> str:
        return self._fallback

    def get_all_extensions(self) -> set[str]:
        """Get all registered extensions."""
        return set(self._prefixes.keys())


# Global default table instance
_default_table: CommentSyntaxTable | None = None


def get_default_table() -> CommentSyntaxTable:
    """Get the shared default comment syntax table."""
    global _default_table
    if _default_table is None:
        _default_table = CommentSyntaxTable()
    return _default_table
