"""Structural enumeration and reverse path resolution.

``enumerate_children`` lists the navigable children of a container (the
drill-down affordances); ``path_from_position`` goes the other way and
reconstructs the canonical Path of whatever sits under a cursor.
"""

from __future__ import annotations

from dataclasses import dataclass

from json_tree_nav.path import Index, Key, Path, PathSegment
from json_tree_nav.query.translator import compile_path
from json_tree_nav.tree.adapter import descendant_at
from json_tree_nav.tree.nodes import Node, NodeKind, Point

__all__ = [
    "ChildEntry",
    "KeyEntry",
    "enumerate_children",
    "list_keys",
    "node_at_path",
    "path_from_position",
]


@dataclass(frozen=True, slots=True)
class ChildEntry:
    """One direct child of a container.

    Attributes:
        segment: ``Key`` for object members, ``Index`` for array elements.
        kind: Kind of the child's value (NULL for a YAML ``key:`` with no value).
        start: Where the member (or element) starts in the source.
    """

    segment: Key | Index
    kind: NodeKind
    start: Point


@dataclass(frozen=True, slots=True)
class KeyEntry:
    """A key of the top-level object, as listed by ``list_keys``."""

    key: str
    kind: NodeKind
    start: Point


def enumerate_children(node: Node) -> list[ChildEntry]:
    """Direct children of ``node`` in document order; empty for scalars."""
    if node.kind is NodeKind.OBJECT:
        entries: list[ChildEntry] = []
        for pair in node.children():
            key = pair.key_text
            if key is None:
                continue
            value = pair.field("value")
            kind = value.kind if value is not None else NodeKind.NULL
            entries.append(ChildEntry(Key(key), kind, pair.start))
        return entries
    if node.kind is NodeKind.ARRAY:
        return [
            ChildEntry(Index(i), element.kind, element.start)
            for i, element in enumerate(node.children())
        ]
    return []


def list_keys(root: Node, value_kind: NodeKind | None = None) -> list[KeyEntry]:
    """Keys of the top-level object, optionally only those holding ``value_kind``."""
    return [
        KeyEntry(entry.segment.name, entry.kind, entry.start)
        for entry in enumerate_children(root)
        if isinstance(entry.segment, Key) and value_kind in (None, entry.kind)
    ]


def node_at_path(root: Node, path: Path) -> Node | None:
    """The node a concrete ``path`` names, or None when it does not exist."""
    if not path.is_concrete:
        msg = f"path {path} selects several nodes"
        raise ValueError(msg)
    captures = compile_path(path).captures(root)
    return captures[0] if captures else None


def path_from_position(root: Node, line: int, column: int) -> Path:
    """Canonical Path of the node at the 0-based ``(line, column)``.

    A position inside an object member's key yields the path of that
    member's value.  The walk runs target-to-root, so segments are appended
    as they are met and reversed once at the end.
    """
    segments: list[PathSegment] = []
    current = descendant_at(root, line, column)
    while current != root:
        parent = current.parent
        if parent is None:
            break
        if current.kind is NodeKind.PAIR:
            key = current.key_text
            if key is not None:
                segments.append(Key(key))
        elif parent.kind is NodeKind.ARRAY:
            for i, element in enumerate(parent.children()):
                if element == current:
                    segments.append(Index(i))
                    break
        current = parent
    segments.reverse()
    return Path(tuple(segments))
