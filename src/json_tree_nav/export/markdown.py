"""Render the object or array around a position as a markdown table.

An object becomes a two-column ``| Key | Value |`` table.  An array of
objects becomes one row per object element; the headers are the union of the
element keys in first-seen order and a missing field is an empty cell.
Non-object elements of an array are ignored.
"""

from __future__ import annotations

import structlog

from json_tree_nav.config import DocumentKind
from json_tree_nav.exceptions import NotFoundError
from json_tree_nav.tree.adapter import TreeAdapter, descendant_at
from json_tree_nav.tree.nodes import Node, NodeKind

__all__ = [
    "array_to_markdown_table",
    "markdown_table_at",
    "object_to_markdown_table",
    "surrounding_container",
]

logger = structlog.get_logger(__name__)


def _cell(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"':
        text = text[1:-1]
    return text.replace("\n", " ").replace("|", "\\|")


def _members(node: Node) -> list[tuple[str, str]]:
    members: list[tuple[str, str]] = []
    for pair in node.children():
        key = pair.key_text
        value = pair.field("value")
        if key is None or value is None:
            continue
        members.append((key, _cell(value.text)))
    return members


def surrounding_container(root: Node, line: int, column: int) -> Node | None:
    """Innermost OBJECT or ARRAY enclosing the 0-based ``(line, column)``."""
    node: Node | None = descendant_at(root, line, column)
    while node is not None and not node.kind.is_container:
        node = node.parent
    return node


def object_to_markdown_table(node: Node) -> str:
    """``| Key | Value |`` table of an OBJECT; empty string when it has no members."""
    members = _members(node)
    if not members:
        return ""
    lines = ["| Key | Value |", "|-----|-------|"]
    lines.extend(f"| {_cell(key)} | {value} |" for key, value in members)
    return "\n".join(lines)


def array_to_markdown_table(node: Node) -> str:
    """Table with one row per object element of an ARRAY; empty string if none."""
    headers: list[str] = []
    rows: list[dict[str, str]] = []
    for element in node.children():
        if element.kind is not NodeKind.OBJECT:
            continue
        row = dict(_members(element))
        headers.extend(key for key in row if key not in headers)
        rows.append(row)
    if not headers:
        return ""

    lines = [
        "| " + " | ".join(_cell(h) for h in headers) + " |",
        "|" + "-----|" * len(headers),
    ]
    for row in rows:
        lines.append("| " + " | ".join(row.get(h, "") for h in headers) + " |")
    return "\n".join(lines)


def markdown_table_at(
    text: str,
    kind: DocumentKind = DocumentKind.JSON,
    line: int = 0,
    column: int = 0,
) -> str:
    """Markdown table of the container around ``(line, column)`` in ``text``.

    Raises:
        ParseError: If the document is malformed.
        NotFoundError: If no container surrounds the position, or it holds
            nothing that fits in a table.
    """
    root = TreeAdapter(kind).parse(text)
    container = surrounding_container(root, line, column)
    if container is None:
        raise NotFoundError(f"no object or array around line {line + 1}, column {column + 1}")

    if container.kind is NodeKind.OBJECT:
        table = object_to_markdown_table(container)
    else:
        table = array_to_markdown_table(container)
    if not table:
        raise NotFoundError(f"the {container.kind} at {container.start} has no tabular content")
    logger.debug("markdown_table", kind=str(container.kind), start=str(container.start))
    return table
