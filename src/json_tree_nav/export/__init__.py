"""Export helpers that render parts of a document in other formats."""

from json_tree_nav.export.markdown import (
    array_to_markdown_table,
    markdown_table_at,
    object_to_markdown_table,
    surrounding_container,
)

__all__ = [
    "array_to_markdown_table",
    "markdown_table_at",
    "object_to_markdown_table",
    "surrounding_container",
]
