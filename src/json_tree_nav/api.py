"""Public API functions for json-tree-nav.

Each call builds a fresh ``HybridResolver`` (or ``TreeAdapter``) so that no
state is shared between calls.  Positions are 0-based ``(line, column)``
with columns counted in UTF-8 bytes, as tree-sitter reports them
(``json_tree_nav.tree.byte_column`` converts a character column).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from json_tree_nav.config import DocumentKind, NavigatorConfig
from json_tree_nav.enumerator import (
    ChildEntry,
    KeyEntry,
    enumerate_children,
    list_keys,
    node_at_path,
    path_from_position,
)
from json_tree_nav.exceptions import NotFoundError
from json_tree_nav.export.markdown import markdown_table_at
from json_tree_nav.navigation import Listener, NavigationSession
from json_tree_nav.path import Path
from json_tree_nav.resolver import HybridResolver
from json_tree_nav.tree.adapter import TreeAdapter
from json_tree_nav.tree.nodes import NodeKind

if TYPE_CHECKING:
    from json_tree_nav.protocols import Evaluator
    from json_tree_nav.result import Resolution

__all__ = [
    "keys",
    "list_children",
    "markdown_table",
    "open_session",
    "path_at",
    "resolve",
]


def _config_for(kind: DocumentKind, config: NavigatorConfig | None) -> NavigatorConfig:
    if config is None:
        return NavigatorConfig(kind=kind)
    return config


def resolve(
    expression: str,
    document_text: str,
    kind: DocumentKind = DocumentKind.JSON,
    config: NavigatorConfig | None = None,
    evaluator: Evaluator | None = None,
) -> Resolution:
    """Resolve a path or filter expression against a document.

    Args:
        expression:    A path (``.abi[0].name``), a path with one projection
                       (``.abi[] | {name,type}``) or any ``jq`` filter.
        document_text: The JSON or YAML document.
        kind:          Document kind; ignored when ``config`` is given.
        config:        Resolution parameters.  Defaults to
                       ``NavigatorConfig(kind=kind)``.
        evaluator:     Evaluator used when structural resolution cannot
                       answer.  Defaults to ``jq``.

    Returns:
        A ``Resolution``; ``found`` is False when nothing is at the path.

    Raises:
        ParseError:      The document is malformed.
        EvaluationError: Delegation was needed and the evaluator failed.
    """
    resolver = HybridResolver(_config_for(kind, config), evaluator=evaluator)
    return resolver.resolve(expression, document_text)


def path_at(
    document_text: str,
    line: int,
    column: int,
    kind: DocumentKind = DocumentKind.JSON,
) -> Path:
    """Return the Path of the value at ``(line, column)``.

    A position on an object member's key yields the path of that member.
    """
    root = TreeAdapter(kind).parse(document_text)
    return path_from_position(root, line, column)


def list_children(
    document_text: str,
    path: Path | str = "",
    kind: DocumentKind = DocumentKind.JSON,
) -> list[ChildEntry]:
    """Direct children of the node at ``path`` (the root by default).

    An empty list means the node is a scalar.

    Raises:
        ParseError:    The document is malformed.
        NotFoundError: Nothing is at ``path``.
    """
    target = path if isinstance(path, Path) else Path.parse(path or ".")
    root = TreeAdapter(kind).parse(document_text)
    node = node_at_path(root, target)
    if node is None:
        raise NotFoundError(f"no value at {target}")
    return enumerate_children(node)


def keys(
    document_text: str,
    value_kind: NodeKind | str | None = None,
    kind: DocumentKind = DocumentKind.JSON,
) -> list[KeyEntry]:
    """Keys of the top-level object, optionally filtered by the kind of their value."""
    root = TreeAdapter(kind).parse(document_text)
    wanted = NodeKind(value_kind) if value_kind is not None else None
    return list_keys(root, wanted)


def markdown_table(
    document_text: str,
    line: int,
    column: int,
    kind: DocumentKind = DocumentKind.JSON,
) -> str:
    """Markdown table of the object or array surrounding ``(line, column)``."""
    return markdown_table_at(document_text, kind, line, column)


def open_session(
    document_text: str,
    kind: DocumentKind = DocumentKind.JSON,
    config: NavigatorConfig | None = None,
    evaluator: Evaluator | None = None,
    listener: Listener | None = None,
) -> NavigationSession:
    """Create a ``NavigationSession`` already viewing the root of ``document_text``."""
    resolver = HybridResolver(_config_for(kind, config), evaluator=evaluator)
    session = NavigationSession(resolver, listener=listener)
    session.open(document_text)
    return session
