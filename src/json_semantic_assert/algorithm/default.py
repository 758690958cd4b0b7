"""DefaultComparator: recursive structural comparison of two JSON trees.

Walks the expected and actual trees in parallel and records every mismatch
in a ``ComparisonResult``.  Mismatches are never raised.

Architecture:
- OBJECT pairs:  every expected key must exist in actual (else *missing*);
                 extra actual keys are *unexpected* unless the mode is
                 extensible.
- ARRAY pairs:   strict-length modes fail outright on a length difference.
                 STRICT_ORDER compares index for index; the other modes use
                 best-effort unordered pairing (see ``_compare_unordered``).
- SCALAR pairs:  equal by value; numbers compare numerically across int,
                 float and Decimal; any kind mismatch fails.
- Mixed kinds:   a field failure carrying both values verbatim.

``compare_nodes`` is the single recursion entry point.  Subclasses override
it (and ``claims_position``) to intercept nodes before structural
comparison; every recursive step goes back through it.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict, deque
from collections.abc import Hashable
from decimal import Decimal
from typing import Any

import numpy as np

from json_semantic_assert.algorithm.config import CompareMode, ModePolicy, policy_for
from json_semantic_assert.algorithm.context import TraversalContext
from json_semantic_assert.algorithm.pairing import pair_by_similarity
from json_semantic_assert.result import ComparisonResult
from json_semantic_assert.tree.builder import TreeBuilder
from json_semantic_assert.tree.nodes import NodeType, TreeNode
from json_semantic_assert.tree.paths import join_index, join_key

__all__ = ["DefaultComparator"]

logger = logging.getLogger(__name__)


def _numbers_equal(a: Any, b: Any) -> bool:
    # Decimal == float is exact in Python; compare as floats when mixed.
    if isinstance(a, Decimal) != isinstance(b, Decimal):
        return float(a) == float(b)
    return bool(a == b)


def _scalars_equal(expected: TreeNode, actual: TreeNode) -> bool:
    if expected.node_type != actual.node_type:
        return False
    if expected.node_type == NodeType.NUMBER:
        return _numbers_equal(expected.value, actual.value)
    return bool(expected.value == actual.value)


def _multiset_key(node: TreeNode) -> Hashable:
    """Bucket key under which equal scalars collide, with 1, 1.0 and Decimal("1") alike."""
    value = node.value
    if node.node_type != NodeType.NUMBER or isinstance(value, int):
        return (node.node_type, value)
    if isinstance(value, Decimal):
        if value.is_nan():
            return ("unmatched", node.node_id)
        if value.is_infinite():
            return (NodeType.NUMBER, float(value))
    elif math.isnan(value):
        # NaN never equals anything, so it gets a bucket of its own.
        return ("unmatched", node.node_id)
    elif math.isinf(value):
        return (NodeType.NUMBER, value)
    if value == int(value):
        return (NodeType.NUMBER, int(value))
    return (NodeType.NUMBER, float(value))


class DefaultComparator:
    """Structural JSON comparator for one ``CompareMode``.

    The mode is fixed at construction and never changes.  A comparator holds
    no per-call state, so one instance may serve concurrent callers.

    Example::

        from json_semantic_assert.algorithm.default import DefaultComparator

        cmp = DefaultComparator("lenient")
        result = cmp.compare_json({"foo": "bar"}, {"foo": "bar", "baz": "bax"})
        result.passed   # True
    """

    def __init__(self, mode: CompareMode | str = CompareMode.STRICT) -> None:
        """Initialise the comparator.

        Args:
            mode: Comparison mode, or its string value.  Defaults to STRICT.

        Raises:
            ValueError: If ``mode`` names no ``CompareMode``.
        """
        self._mode = CompareMode(mode)
        self._policy: ModePolicy = policy_for(self._mode)
        self._builder = TreeBuilder()

    @property
    def mode(self) -> CompareMode:
        return self._mode

    @property
    def policy(self) -> ModePolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare_json(self, expected: Any, actual: Any) -> ComparisonResult:
        """Compare two JSON documents and return a fresh ``ComparisonResult``.

        Args:
            expected: Expected JSON value (dict, list, str, number, bool, None).
            actual:   Actual JSON value.

        Returns:
            A ``ComparisonResult`` holding every mismatch found.

        Raises:
            TypeError: If either document contains a non-JSON value.
        """
        result = ComparisonResult()
        context = self.new_context(self._builder.build(expected), self._builder.build(actual))
        self.compare_nodes("", context.expected_root, context.actual_root, result, context)
        logger.debug(
            "Compared documents under %s: %d failure(s), %d missing, %d unexpected",
            self._mode,
            len(result.field_failures),
            len(result.field_missing),
            len(result.field_unexpected),
        )
        return result

    def compare_values(
        self, path: str, expected: Any, actual: Any, result: ComparisonResult
    ) -> None:
        """Compare two raw JSON values at ``path``, recording into ``result``.

        The values are treated as the roots of their own documents: JSONPath
        selectors of a customizing subclass are resolved against them, while
        path patterns see the full ``path`` prefix.
        """
        expected_root = self._builder.build(expected, path)
        actual_root = self._builder.build(actual, path)
        context = self.new_context(expected_root, actual_root)
        self.compare_nodes(path, expected_root, actual_root, result, context)

    def new_context(self, expected_root: TreeNode, actual_root: TreeNode) -> TraversalContext:
        """Create the call-scoped context for one top-level comparison."""
        return TraversalContext(expected_root=expected_root, actual_root=actual_root)

    # ------------------------------------------------------------------
    # Recursion entry points (overridable)
    # ------------------------------------------------------------------

    def compare_nodes(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        """Compare one pair of nodes located at ``path``."""
        self.compare_structure(path, expected, actual, result, context)

    def claims_position(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        context: TraversalContext,
    ) -> bool:
        """Whether an unordered array element must be compared positionally.

        The default comparator never pins elements to their positions.
        """
        return False

    # ------------------------------------------------------------------
    # Structural comparison
    # ------------------------------------------------------------------

    def compare_structure(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        """Compare two nodes by structure and value, without customizations."""
        if expected.node_type == NodeType.OBJECT and actual.node_type == NodeType.OBJECT:
            self._compare_objects(path, expected, actual, result, context)
        elif expected.node_type == NodeType.ARRAY and actual.node_type == NodeType.ARRAY:
            self._compare_arrays(path, expected, actual, result, context)
        elif expected.is_container or actual.is_container:
            result.fail(path, expected.value, actual.value)
        elif not _scalars_equal(expected, actual):
            result.fail(path, expected.value, actual.value)

    def _compare_objects(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        for key, expected_child in expected.fields.items():
            child_path = join_key(path, key)
            actual_child = actual.fields.get(key)
            if actual_child is None:
                result.missing(child_path, expected_child.value)
            else:
                self.compare_nodes(child_path, expected_child, actual_child, result, context)

        if not self._policy.extensible:
            for key, actual_child in actual.fields.items():
                if key not in expected.fields:
                    result.unexpected(join_key(path, key), actual_child.value)

    def _compare_arrays(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        n_expected = len(expected.elements)
        n_actual = len(actual.elements)
        if self._policy.strict_length and n_expected != n_actual:
            result.fail(
                path,
                n_expected,
                n_actual,
                message=f"Expected {n_expected} values but got {n_actual}",
            )
            return

        if self._policy.strict_order:
            self._compare_ordered(path, expected, actual, result, context)
        else:
            self._compare_unordered(path, expected, actual, result, context)

    def _compare_ordered(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        expected_elems = expected.elements
        actual_elems = actual.elements
        for i, (e, a) in enumerate(zip(expected_elems, actual_elems)):
            self.compare_nodes(join_index(path, i), e, a, result, context)

        for i in range(len(actual_elems), len(expected_elems)):
            result.missing(join_index(path, i), expected_elems[i].value)
        if not self._policy.extensible:
            for j in range(len(expected_elems), len(actual_elems)):
                result.unexpected(join_index(path, j), actual_elems[j].value)

    def _compare_unordered(
        self,
        path: str,
        expected: TreeNode,
        actual: TreeNode,
        result: ComparisonResult,
        context: TraversalContext,
    ) -> None:
        """Best-effort pairing of two arrays whose order does not matter.

        1. Elements a customization claims are compared positionally.
        2. Each remaining expected element takes the first remaining actual
           element it matches exactly (judged on a scratch result).  When no
           element is claimed and both arrays hold only scalars, this is a
           multiset match over value buckets instead.
        3. Leftovers are paired by fewest scratch mismatches and compared for
           real, reported under the expected index.
        4. Unpaired expected elements are missing; unpaired actual elements
           are unexpected unless the mode is extensible.

        The pairing in step 3 minimizes total mismatches rather than taking
        the first available candidate, so a failure may be reported at a
        different index than a first-candidate pairing would choose.
        """
        expected_elems = expected.elements
        actual_elems = actual.elements

        free_expected: list[int] = []
        pinned: set[int] = set()
        for i, e in enumerate(expected_elems):
            if i < len(actual_elems) and self.claims_position(
                join_index(path, i), e, actual_elems[i], context
            ):
                self.compare_nodes(join_index(path, i), e, actual_elems[i], result, context)
                pinned.add(i)
            else:
                free_expected.append(i)
        free_actual = [j for j in range(len(actual_elems)) if j not in pinned]

        scores: dict[tuple[int, int], int] = {}

        def mismatches(i: int, j: int) -> int:
            if (i, j) not in scores:
                scratch = ComparisonResult()
                self.compare_nodes(
                    join_index(path, i), expected_elems[i], actual_elems[j], scratch, context
                )
                scores[(i, j)] = scratch.outcome_count
            return scores[(i, j)]

        scalars_only = not pinned and not any(
            node.is_container for node in (*expected_elems, *actual_elems)
        )
        if scalars_only:
            leftover_expected, available = _match_scalars(expected_elems, actual_elems)
        else:
            # Exact matches first, in document order.
            leftover_expected = []
            available = list(free_actual)
            for i in free_expected:
                match = next((j for j in available if mismatches(i, j) == 0), None)
                if match is None:
                    leftover_expected.append(i)
                else:
                    available.remove(match)

        # Similarity pairing of what is left.
        unpaired_expected = set(leftover_expected)
        if leftover_expected and available:
            if scalars_only:
                # Leftover scalars share no bucket: every pairing is one mismatch.
                matrix = np.ones((len(leftover_expected), len(available)))
            else:
                matrix = np.array(
                    [[mismatches(i, j) for j in available] for i in leftover_expected],
                    dtype=float,
                )
            paired: set[int] = set()
            for i, j in pair_by_similarity(matrix, leftover_expected, available):
                self.compare_nodes(
                    join_index(path, i), expected_elems[i], actual_elems[j], result, context
                )
                unpaired_expected.discard(i)
                paired.add(j)
            available = [j for j in available if j not in paired]

        for i in sorted(unpaired_expected):
            result.missing(join_index(path, i), expected_elems[i].value)
        if not self._policy.extensible:
            for j in available:
                result.unexpected(join_index(path, j), actual_elems[j].value)


def _match_scalars(
    expected_elems: list[TreeNode], actual_elems: list[TreeNode]
) -> tuple[list[int], list[int]]:
    """Multiset match of two scalar arrays.

    Each expected element takes the first actual element with an equal value
    not already taken.

    Returns:
        The expected indices left unmatched, and the actual indices left
        unmatched, both in document order.
    """
    buckets: defaultdict[Hashable, deque[int]] = defaultdict(deque)
    for j, node in enumerate(actual_elems):
        buckets[_multiset_key(node)].append(j)

    leftover_expected: list[int] = []
    taken: set[int] = set()
    for i, node in enumerate(expected_elems):
        bucket = buckets.get(_multiset_key(node))
        if bucket:
            taken.add(bucket.popleft())
        else:
            leftover_expected.append(i)
    return leftover_expected, [j for j in range(len(actual_elems)) if j not in taken]
