"""Tests for the markdown table export."""

from __future__ import annotations

import pytest

from json_tree_nav.config import DocumentKind
from json_tree_nav.exceptions import NotFoundError
from json_tree_nav.export import (
    array_to_markdown_table,
    markdown_table_at,
    object_to_markdown_table,
    surrounding_container,
)
from json_tree_nav.tree import NodeKind, TreeAdapter


class TestSurroundingContainer:
    def test_innermost_object(self, nested_doc: str) -> None:
        root = TreeAdapter().parse(nested_doc)
        container = surrounding_container(root, 6, 15)
        assert container is not None
        assert container.kind is NodeKind.OBJECT
        assert container.children()[0].key_text == "version"

    def test_scalar_root_has_none(self) -> None:
        root = TreeAdapter().parse('"just text"')
        assert surrounding_container(root, 0, 3) is None


class TestObjectTable:
    def test_key_value_rows(self) -> None:
        root = TreeAdapter().parse('{"version": 2, "draft": false, "notes": null}')
        assert object_to_markdown_table(root) == (
            "| Key | Value |\n"
            "|-----|-------|\n"
            "| version | 2 |\n"
            "| draft | false |\n"
            "| notes | null |"
        )

    def test_quotes_removed_newlines_collapsed_pipes_escaped(self) -> None:
        root = TreeAdapter().parse('{"a": "x|y", "b": {\n  "c": 1\n}}')
        assert object_to_markdown_table(root).split("\n")[2:] == [
            "| a | x\\|y |",
            '| b | {   "c": 1 } |',
        ]

    def test_empty_object(self) -> None:
        assert object_to_markdown_table(TreeAdapter().parse("{}")) == ""


class TestArrayTable:
    def test_headers_are_union_in_first_seen_order(self, nested_doc: str) -> None:
        root = TreeAdapter().parse(nested_doc)
        abi = root.children()[1].field("value")
        assert abi is not None
        assert array_to_markdown_table(abi) == (
            "| name | type | inputs |\n"
            "|-----|-----|-----|\n"
            '| transfer | function | [{"name": "to"}] |\n'
            "| Transfer | event |  |"
        )

    def test_non_object_elements_ignored(self) -> None:
        root = TreeAdapter().parse('[1, {"a": "x"}, "s"]')
        assert array_to_markdown_table(root) == "| a |\n|-----|\n| x |"

    def test_no_object_elements(self) -> None:
        assert array_to_markdown_table(TreeAdapter().parse("[1, 2]")) == ""


class TestMarkdownTableAt:
    def test_json(self, nested_doc: str) -> None:
        table = markdown_table_at(nested_doc, DocumentKind.JSON, 6, 15)
        assert table.startswith("| Key | Value |")
        assert "| version | 2 |" in table

    def test_yaml(self, yaml_doc: str) -> None:
        table = markdown_table_at(yaml_doc, DocumentKind.YAML, 7, 3)
        assert table == "| Key | Value |\n|-----|-------|\n| version | 2 |\n| draft | false |"

    def test_yaml_sequence(self, yaml_doc: str) -> None:
        table = markdown_table_at(yaml_doc, DocumentKind.YAML, 2, 2)
        assert table.split("\n")[0] == "| name | type |"
        assert table.split("\n")[2:] == ["| transfer | function |", "| Transfer | event |"]

    def test_no_container(self) -> None:
        with pytest.raises(NotFoundError, match="no object or array"):
            markdown_table_at("42", DocumentKind.JSON, 0, 0)

    def test_nothing_tabular(self) -> None:
        with pytest.raises(NotFoundError, match="no tabular content"):
            markdown_table_at("[1, 2]", DocumentKind.JSON, 0, 0)
