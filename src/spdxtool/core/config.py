"""
Configuration module for spdxtool.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None

DEFAULT_EXTENSIONS = ["clj", "cljc", "cljs"]


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    value = section_defaults.get(key)
    return fallback if value is None else value


@dataclass
class HeaderConfig:
    """Header values; None means "resolve from project metadata"."""

    spdx_id: Optional[str] = field(default_factory=lambda: _get_default("header", "spdx_id"))
    copyright: Optional[str] = field(
        default_factory=lambda: _get_default("header", "copyright")
    )
    year: Optional[str] = field(default_factory=lambda: _get_default("header", "year"))


@dataclass
class SelectionConfig:
    """Configuration for file selection."""

    extensions: list[str] = field(
        default_factory=lambda: list(
            _get_default("selection", "extensions", DEFAULT_EXTENSIONS)
        )
    )
    exclude_patterns: list[str] = field(
        default_factory=lambda: list(_get_default("selection", "exclude_patterns", []))
    )


@dataclass
class CatalogConfig:
    """Configuration for the SPDX license catalog."""

    base_url: str = field(
        default_factory=lambda: _get_default("catalog", "base_url", "https://spdx.org/licenses")
    )
    timeout: float = field(default_factory=lambda: _get_default("catalog", "timeout", 30.0))
    max_retries: int = field(default_factory=lambda: _get_default("catalog", "max_retries", 2))
    cache_dir: Optional[str] = field(
        default_factory=lambda: _get_default("catalog", "cache_dir")
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class SpdxToolConfig:
    """Main configuration class for spdxtool."""

    header: HeaderConfig = field(default_factory=HeaderConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "SpdxToolConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            SpdxToolConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "SpdxToolConfig":
        """Create SpdxToolConfig from a dictionary."""
        config = cls()

        if "header" in data:
            config.header = HeaderConfig(**data["header"])
        if "selection" in data:
            config.selection = SelectionConfig(**data["selection"])
        if "catalog" in data:
            config.catalog = CatalogConfig(**data["catalog"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> "SpdxToolConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: SPDXTOOL_<SECTION>_<KEY>
        Examples:
            - SPDXTOOL_HEADER_SPDX_ID
            - SPDXTOOL_HEADER_COPYRIGHT
            - SPDXTOOL_SELECTION_EXTENSIONS (comma separated)
            - SPDXTOOL_CATALOG_CACHE_DIR
            - SPDXTOOL_LOGGING_LEVEL

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Self with environment overrides applied
        """
        env = os.environ if environ is None else environ
        env_mappings = {
            # Header config
            "SPDXTOOL_HEADER_SPDX_ID": ("header", "spdx_id", str),
            "SPDXTOOL_HEADER_COPYRIGHT": ("header", "copyright", str),
            "SPDXTOOL_HEADER_YEAR": ("header", "year", str),
            # Selection config
            "SPDXTOOL_SELECTION_EXTENSIONS": ("selection", "extensions", _parse_list),
            "SPDXTOOL_SELECTION_EXCLUDE_PATTERNS": ("selection", "exclude_patterns", _parse_list),
            # Catalog config
            "SPDXTOOL_CATALOG_BASE_URL": ("catalog", "base_url", str),
            "SPDXTOOL_CATALOG_TIMEOUT": ("catalog", "timeout", float),
            "SPDXTOOL_CATALOG_MAX_RETRIES": ("catalog", "max_retries", int),
            "SPDXTOOL_CATALOG_CACHE_DIR": ("catalog", "cache_dir", str),
            # Logging config
            "SPDXTOOL_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = env.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string into a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(
    config_path: Optional[Path | str] = None,
    apply_env: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> SpdxToolConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.
        environ: Mapping to read overrides from (defaults to os.environ)

    Returns:
        SpdxToolConfig instance
    """
    if config_path:
        config = SpdxToolConfig.from_file(config_path)
    else:
        config = SpdxToolConfig()

    if apply_env:
        config.apply_env_overrides(environ)

    return config
