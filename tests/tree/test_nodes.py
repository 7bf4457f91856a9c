"""Tests for NodeKind StrEnum, Point/Range and the Node view.

Verifies:
- NodeKind has exactly 7 members with lowercase string values (StrEnum property)
- Point renders 1-based and orders by (line, column)
- Node folds JSON and YAML grammar types onto the same logical kinds
- Node equality follows the underlying tree-sitter node within one parse
- Multi-line node text is de-indented
"""

from __future__ import annotations

import pytest

from json_tree_nav.config import DocumentKind
from json_tree_nav.tree import Node, NodeKind, Point, Range, TreeAdapter


class TestNodeKind:
    """Tests for the NodeKind StrEnum."""

    def test_has_exactly_seven_members(self) -> None:
        assert len(NodeKind) == 7

    def test_values_are_lowercased(self) -> None:
        assert NodeKind.OBJECT == "object"
        assert NodeKind.ARRAY == "array"
        assert NodeKind.PAIR == "pair"
        assert NodeKind.STRING == "string"
        assert NodeKind.NUMBER == "number"
        assert NodeKind.BOOL == "bool"
        assert NodeKind.NULL == "null"

    def test_containers(self) -> None:
        assert NodeKind.OBJECT.is_container
        assert NodeKind.ARRAY.is_container
        assert not NodeKind.PAIR.is_container
        assert not NodeKind.STRING.is_container

    def test_scalars(self) -> None:
        scalars = {k for k in NodeKind if k.is_scalar}
        assert scalars == {NodeKind.STRING, NodeKind.NUMBER, NodeKind.BOOL, NodeKind.NULL}


class TestPointAndRange:
    """Tests for Point and Range."""

    def test_point_str_is_one_based(self) -> None:
        assert str(Point(0, 0)) == "1:1"
        assert str(Point(2, 9)) == "3:10"

    def test_points_order_by_line_then_column(self) -> None:
        assert Point(0, 5) < Point(1, 0)
        assert Point(1, 0) < Point(1, 1)
        assert sorted([Point(2, 0), Point(0, 3), Point(0, 1)]) == [
            Point(0, 1),
            Point(0, 3),
            Point(2, 0),
        ]

    def test_range_is_half_open(self) -> None:
        span = Range(Point(0, 2), Point(0, 5))
        assert span.contains(Point(0, 2))
        assert span.contains(Point(0, 4))
        assert not span.contains(Point(0, 5))
        assert not span.contains(Point(0, 1))


# ---------------------------------------------------------------------------
# Node over JSON
# ---------------------------------------------------------------------------


class TestJsonNode:
    """The Node view over the tree-sitter JSON grammar."""

    @pytest.fixture
    def root(self, nested_doc: str) -> Node:
        return TreeAdapter(DocumentKind.JSON).parse(nested_doc)

    def test_root_is_object(self, root: Node) -> None:
        assert root.kind is NodeKind.OBJECT
        assert root.grammar_type == "object"
        assert root.parent is None

    def test_object_children_are_pairs_in_order(self, root: Node) -> None:
        pairs = root.children()
        assert [p.kind for p in pairs] == [NodeKind.PAIR] * 3
        assert [p.key_text for p in pairs] == ["name", "abi", "meta"]

    def test_pair_fields(self, root: Node) -> None:
        pair = root.children()[0]
        key = pair.field("key")
        value = pair.field("value")
        assert key is not None and value is not None
        assert key.text == '"name"'
        assert value.text == '"token"'
        assert pair.children() == [key, value]

    def test_field_on_non_pair_is_none(self, root: Node) -> None:
        assert root.field("key") is None
        assert root.key_text is None

    def test_array_children_are_elements(self, root: Node) -> None:
        abi = root.children()[1].field("value")
        assert abi is not None
        assert abi.kind is NodeKind.ARRAY
        elements = abi.children()
        assert len(elements) == 2
        assert all(e.kind is NodeKind.OBJECT for e in elements)

    def test_scalar_kinds(self, root: Node) -> None:
        meta = root.children()[2].field("value")
        assert meta is not None
        kinds = [pair.field("value").kind for pair in meta.children()]  # type: ignore[union-attr]
        assert kinds == [NodeKind.NUMBER, NodeKind.BOOL, NodeKind.NULL]

    def test_scalars_have_no_children(self, root: Node) -> None:
        value = root.children()[0].field("value")
        assert value is not None
        assert value.children() == []

    def test_parent_skips_to_logical_ancestor(self, root: Node) -> None:
        pair = root.children()[0]
        value = pair.field("value")
        assert value is not None
        assert value.parent == pair
        assert pair.parent == root

    def test_equality_within_one_parse(self, root: Node) -> None:
        assert root.children()[1] == root.children()[1]
        assert hash(root.children()[1]) == hash(root.children()[1])
        assert root.children()[0] != root.children()[1]

    def test_nodes_of_different_parses_differ(self, nested_doc: str, root: Node) -> None:
        other = TreeAdapter(DocumentKind.JSON).parse(nested_doc)
        assert other != root

    def test_range_of_root(self, root: Node, nested_doc: str) -> None:
        assert root.start == Point(0, 0)
        assert root.range.end.line == nested_doc.count("\n")

    def test_multiline_text_is_deindented(self, root: Node) -> None:
        abi = root.children()[1].field("value")
        assert abi is not None
        lines = abi.text.split("\n")
        assert lines[0] == "["
        assert lines[1].startswith('  {"name": "transfer"')
        assert lines[-1] == "]"

    def test_deindent_counts_characters_not_bytes(self) -> None:
        # The inner object starts at character column 9, byte column 13.
        doc = '{"éééé": {\n           "a": 1\n           }}'
        value = TreeAdapter().parse(doc).children()[0].field("value")
        assert value is not None
        assert value.text == '{\n  "a": 1\n  }'

    def test_escaped_key_is_decoded(self) -> None:
        root = TreeAdapter().parse('{"a\\"b": 1, "caf\\u00e9": 2}')
        assert [p.key_text for p in root.children()] == ['a"b', "café"]

    def test_not_logical_raises(self, root: Node) -> None:
        with pytest.raises(ValueError, match="not a logical node"):
            Node(root.ts_node.child(0), root.source)  # the "{" token


# ---------------------------------------------------------------------------
# Node over YAML
# ---------------------------------------------------------------------------


class TestYamlNode:
    """The same logical shape over the tree-sitter YAML grammar."""

    @pytest.fixture
    def root(self, yaml_doc: str) -> Node:
        return TreeAdapter(DocumentKind.YAML).parse(yaml_doc)

    def test_root_is_mapping(self, root: Node) -> None:
        assert root.kind is NodeKind.OBJECT
        assert root.grammar_type == "block_mapping"

    def test_keys_in_order(self, root: Node) -> None:
        assert [p.key_text for p in root.children()] == ["name", "abi", "meta"]

    def test_sequence_elements(self, root: Node) -> None:
        abi = root.children()[1].field("value")
        assert abi is not None
        assert abi.kind is NodeKind.ARRAY
        assert abi.grammar_type == "block_sequence"
        assert [e.kind for e in abi.children()] == [NodeKind.OBJECT, NodeKind.OBJECT]

    def test_scalar_kinds(self, root: Node) -> None:
        meta = root.children()[2].field("value")
        assert meta is not None
        kinds = [pair.field("value").kind for pair in meta.children()]  # type: ignore[union-attr]
        assert kinds == [NodeKind.NUMBER, NodeKind.BOOL]

    def test_nested_block_text_is_flush_left(self, root: Node) -> None:
        abi = root.children()[1].field("value")
        assert abi is not None
        assert abi.text.split("\n")[:2] == ["- name: transfer", "  type: function"]

    def test_missing_value_is_none(self) -> None:
        root = TreeAdapter(DocumentKind.YAML).parse("a:\nb: 1\n")
        first, second = root.children()
        assert first.key_text == "a"
        assert first.field("value") is None
        assert second.field("value") is not None

    def test_comments_are_skipped(self) -> None:
        root = TreeAdapter(DocumentKind.YAML).parse("# header\na: 1\n# between\nb: 2\n")
        assert [p.key_text for p in root.children()] == ["a", "b"]

    def test_quoted_keys_are_unquoted(self) -> None:
        root = TreeAdapter(DocumentKind.YAML).parse("\"x y\": 1\n'it''s': 2\n")
        assert [p.key_text for p in root.children()] == ["x y", "it's"]

    def test_flow_collections(self) -> None:
        root = TreeAdapter(DocumentKind.YAML).parse("{a: 1, b: [1, 2]}\n")
        assert root.kind is NodeKind.OBJECT
        b = root.children()[1].field("value")
        assert b is not None
        assert b.kind is NodeKind.ARRAY
        assert [e.text for e in b.children()] == ["1", "2"]
