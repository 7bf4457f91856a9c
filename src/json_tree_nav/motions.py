"""Cursor motions and text-object ranges over a parsed document.

Motions jump between the drill-down targets of the root container: object
members whose value is itself a container, and array elements that are
containers.  Both directions wrap around at the ends of the document.
"""

from __future__ import annotations

from json_tree_nav.enumerator import enumerate_children
from json_tree_nav.tree.adapter import descendant_at
from json_tree_nav.tree.nodes import Node, NodeKind, Point

__all__ = [
    "navigable_positions",
    "next_navigable",
    "pair_node_at",
    "previous_navigable",
    "value_node_at",
]


def navigable_positions(root: Node) -> list[Point]:
    """Start positions of the container children of ``root``, in document order."""
    return [entry.start for entry in enumerate_children(root) if entry.kind.is_container]


def next_navigable(root: Node, line: int, column: int) -> Point | None:
    """First navigable position after ``(line, column)``, wrapping to the first."""
    positions = navigable_positions(root)
    if not positions:
        return None
    cursor = Point(line, column)
    return next((p for p in positions if p > cursor), positions[0])


def previous_navigable(root: Node, line: int, column: int) -> Point | None:
    """Last navigable position before ``(line, column)``, wrapping to the last."""
    positions = navigable_positions(root)
    if not positions:
        return None
    cursor = Point(line, column)
    return next((p for p in reversed(positions) if p < cursor), positions[-1])


def value_node_at(root: Node, line: int, column: int) -> Node | None:
    """The value under the cursor.

    On a member's key (or its separator) this is the member's value; None
    when that member has no value (YAML ``key:``).
    """
    node = descendant_at(root, line, column)
    if node.kind is NodeKind.PAIR:
        return node.field("value")
    parent = node.parent
    if parent is not None and parent.kind is NodeKind.PAIR and node == parent.field("key"):
        return parent.field("value")
    return node


def pair_node_at(root: Node, line: int, column: int) -> Node | None:
    """The innermost key/value member enclosing the cursor, if any."""
    node: Node | None = descendant_at(root, line, column)
    while node is not None:
        if node.kind is NodeKind.PAIR:
            return node
        node = node.parent
    return None
