"""CustomizingComparator: default comparison with selector-driven overrides.

This is the orchestration layer between the structural comparator and the
customization registry.  At every node (the root and objects included) it
asks the registry which customizations apply:

- none:  the node is compared structurally, recursing through
  ``compare_nodes`` so deeper nodes get the same treatment;
- some:  every applicable matcher runs on the raw values.  A ``MatcherError``
  records one failure carrying its message.  Any rejection records one
  failure with both values.  When all accept, the node and its whole subtree
  count as matched.

Each top-level ``compare_json`` call builds a fresh ``TraversalContext``
(both trees, the queried side, an empty JSONPath result cache) and threads it
through the recursion.  The comparator itself holds only immutable
configuration, so one instance may be shared across threads.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from json_semantic_assert.algorithm.config import CompareMode, QueryDocument
from json_semantic_assert.algorithm.context import TraversalContext
from json_semantic_assert.algorithm.default import DefaultComparator
from json_semantic_assert.customization.registry import CustomizationRegistry
from json_semantic_assert.errors import MatcherError

if TYPE_CHECKING:
    from json_semantic_assert.customization.customization import Customization
    from json_semantic_assert.result import ComparisonResult
    from json_semantic_assert.tree.nodes import TreeNode

__all__ = ["CustomizingComparator"]


class CustomizingComparator(DefaultComparator):
    """Comparator applying path-pattern and JSONPath customizations.

    Example::

        from json_semantic_assert import CompareMode, CustomizingComparator, JSONPathCustomization

        cmp = CustomizingComparator(
            CompareMode.LENIENT,
            [JSONPathCustomization.ignore("$..timestamp")],
        )
        cmp.compare_json(
            {"id": 1, "meta": {"timestamp": 1}},
            {"id": 1, "meta": {"timestamp": 2}},
        ).passed   # True
    """

    def __init__(
        self,
        mode: CompareMode | str = CompareMode.STRICT,
        customizations: Iterable[Customization] = (),
        query_document: QueryDocument | str = QueryDocument.EXPECTED,
    ) -> None:
        """Initialise the comparator.

        Args:
            mode:           Comparison mode, or its string value.
            customizations: Customizations to apply, in evaluation order.
            query_document: Document JSONPath selectors are evaluated against.
                Defaults to the expected document.

        Raises:
            ValueError: If ``mode`` or ``query_document`` is unknown.
            CustomizationError: If an entry of ``customizations`` is not a
                ``Customization``.
        """
        super().__init__(mode)
        self._registry = CustomizationRegistry(customizations)
        self._query_document = QueryDocument(query_document)

    @property
    def customizations(self) -> CustomizationRegistry:
        return self._registry

    @property
    def query_document(self) -> QueryDocument:
        return self._query_document

    def new_context(self, expected_root: TreeNode, actual_root: TreeNode) -> TraversalContext:
        return TraversalContext(
            expected_root=expected_root,
            actual_root=actual_root,
            query_document=self._query_document,
        )

    # ------------------------------------------------------------------
    # Overridden recursion entry points
    # ------------------------------------------------------------------

    def compare_nodes(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        applicable = self._registry.find_applicable(path, expected, actual, context)
        if not applicable:
            self.compare_structure(path, expected, actual, result, context)
            return

        try:
            verdicts = [c.matches(path, expected.value, actual.value, result) for c in applicable]
        except MatcherError as exc:
            result.fail_with(path, exc, expected.value, actual.value)
            return
        if not all(verdicts):
            result.fail(path, expected.value, actual.value)

    def claims_position(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        context: TraversalContext,
    ) -> bool:
        """Customized array elements are compared with the element at their index."""
        return bool(self._registry.find_applicable(path, expected, actual, context))
