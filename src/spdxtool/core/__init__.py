"""
Core Layer - comment syntax, pattern matching, exclusion, file selection,
header codec, project detection, and configuration.
"""

from spdxtool.core.comment_syntax import (
    FALLBACK_PREFIX,
    CommentSyntaxTable,
    get_default_table,
)
from spdxtool.core.config import (
    CatalogConfig,
    HeaderConfig,
    LoggingConfig,
    SelectionConfig,
    SpdxToolConfig,
    load_config,
)
from spdxtool.core.errors import ConfigurationUnresolvedError
from spdxtool.core.exclusion import ExclusionRuleSet, is_excluded, load_gitignore_patterns
from spdxtool.core.file_selector import FileSelector, FileTarget, select_files
from spdxtool.core.header_codec import (
    HeaderFields,
    HeaderSpec,
    HeaderState,
    HeaderStatus,
    classify,
    render,
    rewrite,
)
from spdxtool.core.pattern_matcher import matches
from spdxtool.core.project_root import ProjectContext, detect_project_context, find_project_root
from spdxtool.core.spdx_document import SpdxDocument, read_spdx_document

__all__ = [
    # Comment syntax
    "CommentSyntaxTable",
    "FALLBACK_PREFIX",
    "get_default_table",
    # Config
    "SpdxToolConfig",
    "HeaderConfig",
    "SelectionConfig",
    "CatalogConfig",
    "LoggingConfig",
    "load_config",
    "ConfigurationUnresolvedError",
    # Selection
    "matches",
    "ExclusionRuleSet",
    "is_excluded",
    "load_gitignore_patterns",
    "FileSelector",
    "FileTarget",
    "select_files",
    # Header codec
    "HeaderFields",
    "HeaderSpec",
    "HeaderState",
    "HeaderStatus",
    "classify",
    "render",
    "rewrite",
    # Project
    "ProjectContext",
    "detect_project_context",
    "find_project_root",
    "SpdxDocument",
    "read_spdx_document",
]
