"""algorithm subpackage: structural comparison and its configuration.

Provides the default structural comparator, the comparison modes and their
policies, the call-scoped traversal context and the similarity pairing used
for unordered arrays.  Import from this module (not from sub-modules
directly) to stay on the stable public interface.

Example::

    from json_semantic_assert.algorithm import CompareMode, DefaultComparator

    cmp = DefaultComparator(CompareMode.STRICT_ORDER)
    cmp.compare_json([1, 2], [2, 1]).passed   # False
"""

from __future__ import annotations

from json_semantic_assert.algorithm.config import CompareMode, ModePolicy, QueryDocument, policy_for
from json_semantic_assert.algorithm.context import TraversalContext
from json_semantic_assert.algorithm.default import DefaultComparator
from json_semantic_assert.algorithm.pairing import pair_by_similarity

__all__ = [
    "CompareMode",
    "DefaultComparator",
    "ModePolicy",
    "QueryDocument",
    "TraversalContext",
    "pair_by_similarity",
    "policy_for",
]
