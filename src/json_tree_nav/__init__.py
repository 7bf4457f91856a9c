"""json-tree-nav - structural navigation and path resolution for JSON/YAML documents."""

from __future__ import annotations

from json_tree_nav.api import (
    keys,
    list_children,
    markdown_table,
    open_session,
    path_at,
    resolve,
)
from json_tree_nav.config import DocumentKind, NavigatorConfig
from json_tree_nav.exceptions import (
    EvaluationError,
    JsonTreeNavError,
    NavigationError,
    NotFoundError,
    ParseError,
    PathSyntaxError,
)
from json_tree_nav.navigation import NavigationSession
from json_tree_nav.path import Index, Key, Path
from json_tree_nav.resolver import HybridResolver
from json_tree_nav.result import Resolution

__version__: str = "0.1.0"
__all__: list[str] = [
    "DocumentKind",
    "EvaluationError",
    "HybridResolver",
    "Index",
    "JsonTreeNavError",
    "Key",
    "NavigationError",
    "NavigationSession",
    "NavigatorConfig",
    "NotFoundError",
    "ParseError",
    "Path",
    "PathSyntaxError",
    "Resolution",
    "keys",
    "list_children",
    "markdown_table",
    "open_session",
    "path_at",
    "resolve",
]
