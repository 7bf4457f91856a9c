"""TreeAdapter: parses JSON/YAML text into a logical Node tree via tree-sitter.

A fresh tree is produced on every ``parse`` call.  Trees are never edited in
place: re-parsing is the only way to observe a change to the document text.
Malformed input never escapes as a crash; it is reported as ``ParseError``
carrying the 1-based position of the first error or missing node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from tree_sitter_language_pack import get_parser

from json_tree_nav.config import DocumentKind
from json_tree_nav.exceptions import ParseError
from json_tree_nav.tree.nodes import Node, is_logical, unwrap

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = structlog.get_logger(__name__)


def _first_error(top: TSNode) -> TSNode:
    """Return the first ERROR or MISSING node in document order."""
    stack = [top]
    while stack:
        raw = stack.pop()
        if raw.is_error or raw.is_missing:
            return raw
        if raw.has_error:
            stack.extend(reversed(raw.children))
    return top


@dataclass
class TreeAdapter:
    """Parses documents of one kind into logical ``Node`` trees.

    Example::

        adapter = TreeAdapter(DocumentKind.JSON)
        root = adapter.parse('{"abi": [{"name": "f"}]}')
        root.kind               # NodeKind.OBJECT
        root.children()[0].key_text   # "abi"
    """

    kind: DocumentKind = DocumentKind.JSON

    def parse(self, text: str) -> Node:
        """Parse ``text`` and return the root Node.

        Raises:
            ParseError: If the text is malformed or holds no value.
        """
        source = text.encode("utf-8")
        parser = get_parser(self.kind.value)  # type: ignore[arg-type]
        tree = parser.parse(source)
        top = tree.root_node

        if top.has_error:
            bad = _first_error(top)
            line, column = bad.start_point
            what = f"missing {bad.type!r}" if bad.is_missing else "unexpected input"
            logger.debug("parse_failed", kind=str(self.kind), line=line + 1, column=column + 1)
            raise ParseError(
                f"malformed {self.kind.value.upper()} document: {what}",
                line=line + 1,
                column=column + 1,
            )

        root = unwrap(top)
        if root is None:
            raise ParseError(f"empty {self.kind.value.upper()} document")
        return Node(root, source)

    def descendant_at(self, root: Node, line: int, column: int) -> Node:
        return descendant_at(root, line, column)


def descendant_at(root: Node, line: int, column: int) -> Node:
    """Most specific logical node covering the 0-based ``(line, column)``.

    Falls back to ``root`` when no more specific node covers the position,
    e.g. inside whitespace between members.
    """
    point = (line, column)
    raw: TSNode | None = root.ts_node.descendant_for_point_range(point, point)
    while raw is not None and not is_logical(raw):
        raw = raw.parent
    if raw is None:
        return root
    node = Node(raw, root.source)
    return node if _is_within(node, root) else root


def _is_within(node: Node, root: Node) -> bool:
    start, end = node.ts_node.start_byte, node.ts_node.end_byte
    return root.ts_node.start_byte <= start and end <= root.ts_node.end_byte


def byte_column(text: str, line: int, column: int) -> int:
    """Convert a character ``column`` on the 0-based ``line`` to a byte column.

    Node positions count UTF-8 bytes, as tree-sitter does; editors and
    terminals count characters.  Columns past the end of the line (or lines
    past the end of the text) are carried over unchanged.
    """
    lines = text.split("\n")
    if line >= len(lines):
        return column
    content = lines[line]
    overflow = max(0, column - len(content))
    return len(content[:column].encode("utf-8")) + overflow
