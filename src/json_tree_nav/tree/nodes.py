"""Node view and NodeKind StrEnum over a tree-sitter concrete syntax tree.

The JSON and YAML grammars describe the same logical structure with different
node types.  This module folds both onto seven logical kinds and hides the
grammar's wrapper nodes (``document``, ``block_node``, ``flow_node`` ...), so
the rest of the package walks one shape regardless of the document kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from json_tree_nav.tree.keys import unquote

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode


class NodeKind(StrEnum):
    """Enumeration of the seven logical node kinds.

    StrEnum values are the lowercased member names:
    - OBJECT -> "object" : JSON object / YAML mapping
    - ARRAY  -> "array"  : JSON array / YAML sequence
    - PAIR   -> "pair"   : a key/value member of an OBJECT
    - STRING -> "string" : string scalar (quoted or plain)
    - NUMBER -> "number" : integer or float scalar
    - BOOL   -> "bool"   : true / false
    - NULL   -> "null"   : null / ~
    """

    OBJECT = auto()
    ARRAY = auto()
    PAIR = auto()
    STRING = auto()
    NUMBER = auto()
    BOOL = auto()
    NULL = auto()

    @property
    def is_container(self) -> bool:
        return self in (NodeKind.OBJECT, NodeKind.ARRAY)

    @property
    def is_scalar(self) -> bool:
        return not self.is_container and self is not NodeKind.PAIR


# Grammar node type -> logical kind.  JSON and YAML type names do not overlap.
_KINDS: dict[str, NodeKind] = {
    # tree-sitter-json
    "object": NodeKind.OBJECT,
    "array": NodeKind.ARRAY,
    "pair": NodeKind.PAIR,
    "string": NodeKind.STRING,
    "number": NodeKind.NUMBER,
    "true": NodeKind.BOOL,
    "false": NodeKind.BOOL,
    "null": NodeKind.NULL,
    # tree-sitter-yaml
    "block_mapping": NodeKind.OBJECT,
    "flow_mapping": NodeKind.OBJECT,
    "block_sequence": NodeKind.ARRAY,
    "flow_sequence": NodeKind.ARRAY,
    "block_mapping_pair": NodeKind.PAIR,
    "flow_pair": NodeKind.PAIR,
    "string_scalar": NodeKind.STRING,
    "double_quote_scalar": NodeKind.STRING,
    "single_quote_scalar": NodeKind.STRING,
    "block_scalar": NodeKind.STRING,
    "timestamp_scalar": NodeKind.STRING,
    "alias": NodeKind.STRING,
    "integer_scalar": NodeKind.NUMBER,
    "float_scalar": NodeKind.NUMBER,
    "boolean_scalar": NodeKind.BOOL,
    "null_scalar": NodeKind.NULL,
}

# Transparent grammar nodes: replaced by their first content child.
_WRAPPERS = frozenset(
    {"document", "stream", "block_node", "flow_node", "plain_scalar", "block_sequence_item"}
)

# Named nodes that never carry content.
_SKIPPED = frozenset({"anchor", "tag", "comment"})


def unwrap(raw: TSNode | None) -> TSNode | None:
    """Descend through wrapper nodes to the node carrying the content.

    Returns None when the wrapper is empty (e.g. a YAML ``key:`` with no value)
    or the content is not a recognised logical node.
    """
    while raw is not None and raw.type in _WRAPPERS:
        raw = next((c for c in raw.named_children if c.type not in _SKIPPED), None)
    if raw is None or raw.type not in _KINDS:
        return None
    return raw


def is_logical(raw: TSNode) -> bool:
    return raw.type in _KINDS


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """A 0-based (line, column) position; columns count bytes."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.column + 1}"


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open source span ``[start, end)`` of a node."""

    start: Point
    end: Point

    def contains(self, point: Point) -> bool:
        return self.start <= point < self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def _extract_text(source: bytes, raw: TSNode) -> str:
    text = source[raw.start_byte : raw.end_byte].decode("utf-8", errors="replace")
    if "\n" not in text:
        return text
    # Strip the indentation shared by the continuation lines, but never more
    # than the column the node starts at, so nested blocks come out flush left.
    first, *rest = text.split("\n")
    widths = [len(line) - len(line.lstrip()) for line in rest if line.strip()]
    # Measured in characters, like the widths; start_point counts bytes.
    line_start = source.rfind(b"\n", 0, raw.start_byte) + 1
    column = len(source[line_start : raw.start_byte].decode("utf-8", errors="replace"))
    indent = min([column, *widths])
    return "\n".join([first, *(line[indent:] for line in rest)])


class Node:
    """Read-only logical view of one tree-sitter node.

    A ``Node`` is only valid for the parse snapshot that produced it: the
    adapter re-parses on every text change and never mutates a tree, so
    holding a ``Node`` across a re-parse observes stale data.

    Equality and hashing follow the identity of the underlying tree-sitter
    node within its snapshot.
    """

    __slots__ = ("_raw", "_source")

    def __init__(self, raw: TSNode, source: bytes) -> None:
        if raw.type not in _KINDS:
            msg = f"not a logical node: {raw.type!r}"
            raise ValueError(msg)
        self._raw = raw
        self._source = source

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._source is other._source and self._raw.id == other._raw.id

    def __hash__(self) -> int:
        return hash(self._raw.id)

    def __repr__(self) -> str:
        return f"Node(kind={self.kind}, range={self.range})"

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def kind(self) -> NodeKind:
        return _KINDS[self._raw.type]

    @property
    def grammar_type(self) -> str:
        """The grammar's own node type, e.g. ``block_mapping``."""
        return self._raw.type

    @property
    def ts_node(self) -> TSNode:
        return self._raw

    @property
    def source(self) -> bytes:
        """The full document bytes this node was parsed from."""
        return self._source

    @property
    def range(self) -> Range:
        start_row, start_col = self._raw.start_point
        end_row, end_col = self._raw.end_point
        return Range(Point(start_row, start_col), Point(end_row, end_col))

    @property
    def start(self) -> Point:
        return self.range.start

    @property
    def text(self) -> str:
        """Source text of the node, de-indented when it spans several lines."""
        return _extract_text(self._source, self._raw)

    @property
    def key_text(self) -> str | None:
        """The unquoted key of a PAIR node; None for every other kind."""
        if self.kind is not NodeKind.PAIR:
            return None
        key = self.field("key")
        if key is None:
            return None
        return unquote(key.text)

    @property
    def parent(self) -> Node | None:
        """Nearest logical ancestor, skipping wrapper nodes."""
        raw = self._raw.parent
        while raw is not None and raw.type not in _KINDS:
            raw = raw.parent
        return Node(raw, self._source) if raw is not None else None

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def children(self) -> list[Node]:
        """Logical children in document order.

        OBJECT -> its PAIR members; ARRAY -> its element values; PAIR -> key
        and (when present) value; scalars -> empty.  Punctuation, comments,
        anchors and tags never appear.
        """
        kind = self.kind
        if kind is NodeKind.PAIR:
            return [n for n in (self.field("key"), self.field("value")) if n is not None]
        if kind is NodeKind.OBJECT:
            return [
                Node(c, self._source)
                for c in self._raw.named_children
                if _KINDS.get(c.type) is NodeKind.PAIR
            ]
        if kind is NodeKind.ARRAY:
            elements: list[Node] = []
            for c in self._raw.named_children:
                if c.type in _SKIPPED:
                    continue
                inner = unwrap(c)
                if inner is not None:
                    elements.append(Node(inner, self._source))
            return elements
        return []

    def field(self, name: str) -> Node | None:
        """Named field of a PAIR (``key`` or ``value``); None otherwise."""
        if self.kind is not NodeKind.PAIR:
            return None
        inner = unwrap(self._raw.child_by_field_name(name))
        return Node(inner, self._source) if inner is not None else None
