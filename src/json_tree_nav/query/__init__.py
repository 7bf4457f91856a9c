"""query subpackage: structural translation of paths and restricted filters.

Example::

    from json_tree_nav.config import DocumentKind
    from json_tree_nav.query import translate
    from json_tree_nav.tree import TreeAdapter

    root = TreeAdapter().parse('{"abi": [{"name": "f", "type": "function"}]}')
    query = translate(".abi[0].name")
    query.execute(root, DocumentKind.JSON).values   # ('"f"',)
"""

from __future__ import annotations

from json_tree_nav.query.pattern import QueryPattern
from json_tree_nav.query.translator import (
    CompiledQuery,
    ExpressionClass,
    StructuralMatch,
    classify,
    compile_path,
    translate,
)

__all__ = [
    "CompiledQuery",
    "ExpressionClass",
    "QueryPattern",
    "StructuralMatch",
    "classify",
    "compile_path",
    "translate",
]
