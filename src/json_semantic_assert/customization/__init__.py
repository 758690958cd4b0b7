"""customization subpackage: selectors, matchers and their registry.

Example::

    from json_semantic_assert.customization import JSONPathCustomization, RegularExpressionValueMatcher

    JSONPathCustomization("$.store.book[*].isbn", RegularExpressionValueMatcher(r"[\\d-]+"))
"""

from __future__ import annotations

from json_semantic_assert.customization.customization import (
    Customization,
    JSONPathCustomization,
    PathCustomization,
)
from json_semantic_assert.customization.matchers import (
    IGNORE,
    ArrayValueMatcher,
    Matcher,
    MatcherKind,
    RegularExpressionValueMatcher,
    as_matcher,
)
from json_semantic_assert.customization.registry import CustomizationRegistry
from json_semantic_assert.customization.resolver import resolve_query
from json_semantic_assert.customization.selectors import PathPattern, compile_query, is_definite

__all__ = [
    "IGNORE",
    "ArrayValueMatcher",
    "Customization",
    "CustomizationRegistry",
    "JSONPathCustomization",
    "Matcher",
    "MatcherKind",
    "PathCustomization",
    "PathPattern",
    "RegularExpressionValueMatcher",
    "as_matcher",
    "compile_query",
    "is_definite",
    "resolve_query",
]
