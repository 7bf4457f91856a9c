"""QueryPattern: a compiled structural query executed against a Node tree.

A pattern is a chain of steps ending in a ``Capture``.  Each step matches one
nesting level and hands the nodes it selects to the next step:

- ``FieldStep(key)``   OBJECT -> value of the member named ``key``
- ``IndexStep(i)``     ARRAY  -> its i-th element (no match when out of range)
- ``EachStep()``       ARRAY  -> every element; OBJECT -> every member value
- ``Capture()``        binds the node it is handed

The outermost step corresponds to the first path segment.  Matching is
pure and in-memory; a miss yields no captures rather than an error.

The same chain can be rendered as tree-sitter query source for the
document's grammar, which is what ``to_query_source`` is for (logging and
debugging); execution walks the logical tree directly.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass

from json_tree_nav.config import DocumentKind
from json_tree_nav.tree.nodes import Node, NodeKind

__all__ = ["Capture", "EachStep", "FieldStep", "IndexStep", "QueryPattern", "Step"]


@dataclass(frozen=True, slots=True)
class Capture:
    def match(self, node: Node) -> Iterator[Node]:
        yield node


@dataclass(frozen=True, slots=True)
class FieldStep:
    key: str
    inner: Step

    def match(self, node: Node) -> Iterator[Node]:
        if node.kind is not NodeKind.OBJECT:
            return
        # Later duplicates win, as they do for jq.
        value: Node | None = None
        for pair in node.children():
            if pair.key_text == self.key:
                value = pair.field("value")
        if value is not None:
            yield from self.inner.match(value)


@dataclass(frozen=True, slots=True)
class IndexStep:
    index: int
    inner: Step

    def match(self, node: Node) -> Iterator[Node]:
        if node.kind is not NodeKind.ARRAY:
            return
        elements = node.children()
        if self.index < len(elements):
            yield from self.inner.match(elements[self.index])


@dataclass(frozen=True, slots=True)
class EachStep:
    inner: Step

    def match(self, node: Node) -> Iterator[Node]:
        if node.kind is NodeKind.ARRAY:
            for element in node.children():
                yield from self.inner.match(element)
        elif node.kind is NodeKind.OBJECT:
            for pair in node.children():
                value = pair.field("value")
                if value is not None:
                    yield from self.inner.match(value)


Step = Capture | FieldStep | IndexStep | EachStep


@dataclass(frozen=True, slots=True)
class QueryPattern:
    """The outermost step of a compiled chain."""

    step: Step

    def captures(self, root: Node) -> list[Node]:
        """All nodes bound by the capture, in document order."""
        return list(self.step.match(root))

    @property
    def depth(self) -> int:
        depth = 0
        step = self.step
        while not isinstance(step, Capture):
            depth += 1
            step = step.inner
        return depth

    def to_query_source(self, kind: DocumentKind) -> str:
        """Equivalent tree-sitter query source for ``kind``'s grammar."""
        if kind is DocumentKind.YAML:
            return _render_yaml(self.step)
        return _render_json(self.step)


def _render_json(step: Step) -> str:
    if isinstance(step, Capture):
        return "(_) @value"
    inner = _render_json(step.inner)
    if isinstance(step, FieldStep):
        return (
            "(object (pair key: (string (string_content) @_key "
            f"(#eq? @_key {json.dumps(step.key)})) value: {inner}))"
        )
    if isinstance(step, IndexStep):
        return "(array " + ". (_) " * step.index + f". {inner})"
    return f"(array {inner})"


def _render_yaml(step: Step) -> str:
    if isinstance(step, Capture):
        return "(_) @value"
    inner = _render_yaml(step.inner)
    # Values sit inside block_node/flow_node wrappers.
    wrapped = inner if isinstance(step.inner, Capture) else f"(_ {inner})"
    if isinstance(step, FieldStep):
        return (
            "(block_mapping (block_mapping_pair key: (flow_node) @_key "
            f"(#eq? @_key {json.dumps(step.key)}) value: {wrapped}))"
        )
    if isinstance(step, IndexStep):
        skipped = ". (block_sequence_item) " * step.index
        return f"(block_sequence {skipped}. (block_sequence_item {wrapped}))"
    return f"(block_sequence (block_sequence_item {wrapped}))"
