"""Tree subpackage: identity-tagged JSON trees.

Re-exports the public API for the tree module:
- TreeNode: dataclass representing a node, with its identity token
- NodeType: StrEnum of the six JSON value kinds
- TreeBuilder: converts any valid JSON value into a TreeNode tree
- join_key / join_index / render_path: location path rendering
"""

from json_semantic_assert.tree.builder import TreeBuilder
from json_semantic_assert.tree.nodes import NodeType, TreeNode
from json_semantic_assert.tree.paths import join_index, join_key, render_path

__all__ = ["NodeType", "TreeBuilder", "TreeNode", "join_index", "join_key", "render_path"]
