"""TraversalContext: call-scoped state of one top-level comparison.

Each top-level ``compare_json`` call builds its own context and threads it
explicitly through the recursion.  Nested recursive calls reuse the context
they are handed, so the query cache and the root references are never reset
mid-traversal, and two calls on the same comparator (from any number of
threads) never see each other's state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from json_semantic_assert.algorithm.config import QueryDocument

if TYPE_CHECKING:
    from json_semantic_assert.tree.nodes import TreeNode


@dataclass(slots=True)
class TraversalContext:
    """Root references and JSONPath result cache for one comparison call.

    Attributes:
        expected_root:  Root of the expected document tree.
        actual_root:    Root of the actual document tree.
        query_document: Which root JSONPath selectors are evaluated against.
        query_cache:    Customization -> frozenset of matched node ids.  Keys
            are customization objects (hashed by identity).
    """

    expected_root: TreeNode
    actual_root: TreeNode
    query_document: QueryDocument = QueryDocument.EXPECTED
    query_cache: dict[object, frozenset[int]] = field(default_factory=dict)

    @property
    def query_root(self) -> TreeNode:
        """The root JSONPath selectors are evaluated against."""
        if self.query_document == QueryDocument.ACTUAL:
            return self.actual_root
        return self.expected_root

    def queried_node(self, expected: TreeNode, actual: TreeNode) -> TreeNode:
        """Of the two nodes at a comparison point, the one from the queried document."""
        return actual if self.query_document == QueryDocument.ACTUAL else expected
