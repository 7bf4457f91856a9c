"""Tree subpackage: a read-only logical view over tree-sitter parse trees.

Re-exports the public API for the tree module:
- Node: logical view of one syntax node (kind, range, children, fields, text)
- NodeKind: StrEnum of the seven logical kinds
- Point / Range: 0-based source positions and spans
- TreeAdapter: parses JSON/YAML text into a root Node
- descendant_at: most specific Node covering a position
- byte_column: character column -> byte column, for user-facing positions
"""

from json_tree_nav.tree.adapter import TreeAdapter, byte_column, descendant_at
from json_tree_nav.tree.nodes import Node, NodeKind, Point, Range

__all__ = ["Node", "NodeKind", "Point", "Range", "TreeAdapter", "byte_column", "descendant_at"]
