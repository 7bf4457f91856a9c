"""Tests for navigable-position motions and value/pair lookups."""

from __future__ import annotations

import pytest

from json_tree_nav.config import DocumentKind
from json_tree_nav.motions import (
    navigable_positions,
    next_navigable,
    pair_node_at,
    previous_navigable,
    value_node_at,
)
from json_tree_nav.tree import Node, NodeKind, Point, TreeAdapter


@pytest.fixture
def root(nested_doc: str) -> Node:
    return TreeAdapter().parse(nested_doc)


class TestNavigablePositions:
    def test_only_container_children(self, root: Node) -> None:
        assert navigable_positions(root) == [Point(2, 2), Point(6, 2)]

    def test_array_elements(self) -> None:
        root = TreeAdapter().parse('[{"a": 1}, 2, [3]]')
        assert navigable_positions(root) == [Point(0, 1), Point(0, 14)]

    def test_scalar_root(self) -> None:
        assert navigable_positions(TreeAdapter().parse("42")) == []


class TestNextPrevious:
    def test_next_moves_forward(self, root: Node) -> None:
        assert next_navigable(root, 0, 0) == Point(2, 2)
        assert next_navigable(root, 2, 2) == Point(6, 2)

    def test_next_wraps_to_first(self, root: Node) -> None:
        assert next_navigable(root, 6, 2) == Point(2, 2)

    def test_previous_moves_backward(self, root: Node) -> None:
        assert previous_navigable(root, 7, 0) == Point(6, 2)
        assert previous_navigable(root, 6, 2) == Point(2, 2)

    def test_previous_wraps_to_last(self, root: Node) -> None:
        assert previous_navigable(root, 2, 2) == Point(6, 2)

    def test_none_without_targets(self) -> None:
        root = TreeAdapter().parse('{"a": 1}')
        assert next_navigable(root, 0, 0) is None
        assert previous_navigable(root, 0, 0) is None

    def test_yaml(self, yaml_doc: str) -> None:
        root = TreeAdapter(DocumentKind.YAML).parse(yaml_doc)
        assert navigable_positions(root) == [Point(1, 0), Point(6, 0)]
        assert next_navigable(root, 2, 0) == Point(6, 0)


class TestValueAndPair:
    def test_value_from_key(self, root: Node) -> None:
        value = value_node_at(root, 1, 4)
        assert value is not None
        assert value.text == '"token"'

    def test_value_from_separator(self, root: Node) -> None:
        value = value_node_at(root, 1, 8)
        assert value is not None
        assert value.text == '"token"'

    def test_value_on_value(self, root: Node) -> None:
        value = value_node_at(root, 6, 22)
        assert value is not None
        assert value.kind is NodeKind.NUMBER

    def test_value_of_empty_yaml_member_is_none(self) -> None:
        root = TreeAdapter(DocumentKind.YAML).parse("a:\nb: 1\n")
        assert value_node_at(root, 0, 0) is None

    def test_pair_around_value(self, root: Node) -> None:
        pair = pair_node_at(root, 1, 12)
        assert pair is not None
        assert pair.key_text == "name"

    def test_innermost_pair(self, root: Node, nested_doc: str) -> None:
        line = nested_doc.split("\n")[3]
        pair = pair_node_at(root, 3, line.index('"to"') + 1)
        assert pair is not None
        assert pair.key_text == "name"
        assert pair.field("value").text == '"to"'  # type: ignore[union-attr]

    def test_no_pair_at_root(self, root: Node) -> None:
        assert pair_node_at(root, 0, 0) is None
