"""Query resolver: maps JSONPath matches to node identities.

A JSONPath query is evaluated once per top-level comparison against the raw
value of the queried document root.  Each ``jsonpath_ng`` match carries the
chain of steps that led to it (``DatumInContext.context``), which is turned
into key/index segments and walked down the identity-tagged tree to find the
designated node.  The set of matched ``node_id``s is cached in the call's
``TraversalContext``.

Identity, not value equality, decides applicability: two equal sibling
values are distinguished by their ids.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.jsonpath import DatumInContext, Fields, Index, Root, This

from json_semantic_assert.errors import QueryResolutionError
from json_semantic_assert.tree.paths import Segment, render_path

if TYPE_CHECKING:
    from json_semantic_assert.algorithm.context import TraversalContext
    from json_semantic_assert.customization.customization import JSONPathCustomization
    from json_semantic_assert.tree.nodes import TreeNode

__all__ = ["resolve_query"]

logger = logging.getLogger(__name__)


def _index_of(step: Index) -> int:
    # jsonpath-ng >= 1.7 stores a tuple of indices, older releases a single one
    indices = getattr(step, "indices", None)
    return int(indices[0]) if indices is not None else int(step.index)


def _segments(datum: DatumInContext, query: str) -> list[Segment]:
    """Key/index segments leading from the document root to ``datum``."""
    segments: list[Segment] = []
    current: DatumInContext | None = datum
    while current is not None:
        step = current.path
        if isinstance(step, Fields) and len(step.fields) == 1:
            segments.append(step.fields[0])
        elif isinstance(step, Index):
            segments.append(_index_of(step))
        elif not isinstance(step, (Root, This)):
            raise QueryResolutionError(query, f"match step {step} does not designate a node")
        current = current.context
    segments.reverse()
    return segments


def _locate(root: TreeNode, datum: DatumInContext, query: str) -> TreeNode:
    segments = _segments(datum, query)
    node = root.locate(segments)
    if node is None:
        raise QueryResolutionError(
            query, f"match at {render_path(segments)!r} does not designate a node"
        )
    return node


def resolve_query(customization: JSONPathCustomization, context: TraversalContext) -> frozenset[int]:
    """Return the ids of every node ``customization`` selects.

    Evaluated at most once per context; later calls are served from
    ``context.query_cache``.

    Args:
        customization: The JSONPath customization to resolve.
        context:       Call-scoped context holding the queried root.

    Returns:
        Frozenset of ``node_id``s from the queried document tree.

    Raises:
        QueryResolutionError: If a definite query matches nothing, a match
            cannot be mapped to a node, or the JSONPath engine fails.
    """
    cached_ids = context.query_cache.get(customization)
    if cached_ids is not None:
        return cached_ids

    root = context.query_root
    selector = customization.selector
    try:
        matches = customization.query.find(root.value)
    except (JSONPathError, AttributeError, IndexError, KeyError, TypeError) as exc:
        raise QueryResolutionError(selector, f"evaluation failed: {exc}") from exc

    if not matches and customization.definite:
        raise QueryResolutionError(selector, "definite query matched nothing")

    ids = frozenset(_locate(root, datum, selector).node_id for datum in matches)
    logger.debug(
        "Resolved JSONPath %r against the %s document: %d node(s)",
        selector,
        context.query_document,
        len(ids),
    )
    context.query_cache[customization] = ids
    return ids
