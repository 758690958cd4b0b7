"""Customizations: a selector paired with a matcher.

A customization overrides default comparison for the nodes its selector
picks out.  Two selector forms are supported:

- ``PathCustomization``: a path pattern matched against the rendered
  location (``store.book[*].price``).
- ``JSONPathCustomization``: a JSONPath query resolved against the queried
  document; applies to exactly the nodes the query designates, by identity.

Both validate their selector and matcher at construction, so a malformed
customization fails before any comparison begins.

Example::

    from json_semantic_assert import JSONPathCustomization, PathCustomization

    JSONPathCustomization.ignore("$..timestamp")
    PathCustomization("store.book[*].price", lambda e, a: a > 0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_semantic_assert.customization.matchers import IGNORE, Matcher, as_matcher
from json_semantic_assert.customization.resolver import resolve_query
from json_semantic_assert.customization.selectors import PathPattern, compile_query, is_definite

if TYPE_CHECKING:
    from jsonpath_ng.jsonpath import JSONPath

    from json_semantic_assert.algorithm.context import TraversalContext
    from json_semantic_assert.result import ComparisonResult
    from json_semantic_assert.tree.nodes import TreeNode

__all__ = ["Customization", "JSONPathCustomization", "PathCustomization"]


class Customization:
    """Base class: a selector deciding applicability plus a matcher.

    Customizations hash and compare by identity, which keys the per-call
    JSONPath result cache.
    """

    def __init__(self, matcher: Any) -> None:
        self._matcher = as_matcher(matcher)

    @property
    def matcher(self) -> Matcher:
        return self._matcher

    def applies_to(
        self, path: str, expected: TreeNode, actual: TreeNode, context: TraversalContext
    ) -> bool:
        """Whether this customization takes over the comparison at this point."""
        raise NotImplementedError

    def matches(self, path: str, expected: Any, actual: Any, result: ComparisonResult) -> bool:
        """Run the matcher on the raw values.

        Raises:
            MatcherError: Propagated from the matcher.
        """
        return self._matcher.evaluate(path, expected, actual, result)


class PathCustomization(Customization):
    """Customization selecting nodes by a pattern over their rendered path."""

    def __init__(self, pattern: str, matcher: Any) -> None:
        """Initialise the customization.

        Raises:
            CustomizationError: If the pattern is blank or malformed, or the
                matcher is None or unusable.
        """
        self._pattern = PathPattern(pattern)
        super().__init__(matcher)

    @classmethod
    def ignore(cls, pattern: str) -> PathCustomization:
        """A customization accepting anything at the matching locations."""
        return cls(pattern, IGNORE)

    @property
    def pattern(self) -> str:
        return self._pattern.text

    def applies_to(
        self, path: str, expected: TreeNode, actual: TreeNode, context: TraversalContext
    ) -> bool:
        return self._pattern.matches(path)

    def __repr__(self) -> str:
        return f"PathCustomization({self._pattern.text!r}, {self._matcher.kind})"


class JSONPathCustomization(Customization):
    """Customization selecting the nodes a JSONPath query designates."""

    def __init__(self, selector: str, matcher: Any) -> None:
        """Initialise the customization.

        Raises:
            CustomizationError: If the selector is blank or the matcher is
                None or unusable.
            InvalidQueryError: If the selector is not valid JSONPath.
        """
        self._query = compile_query(selector)
        self._selector = str(selector).strip()
        self._definite = is_definite(self._query)
        super().__init__(matcher)

    @classmethod
    def ignore(cls, selector: str) -> JSONPathCustomization:
        """A customization accepting anything at the nodes ``selector`` designates."""
        return cls(selector, IGNORE)

    @property
    def selector(self) -> str:
        return self._selector

    @property
    def query(self) -> JSONPath:
        return self._query

    @property
    def definite(self) -> bool:
        """True when the query can only ever designate a single node."""
        return self._definite

    def applies_to(
        self, path: str, expected: TreeNode, actual: TreeNode, context: TraversalContext
    ) -> bool:
        node = context.queried_node(expected, actual)
        return node.node_id in resolve_query(self, context)

    def __repr__(self) -> str:
        return f"JSONPathCustomization({self._selector!r}, {self._matcher.kind})"
