"""JSON semantic assert - mode-aware JSON comparison with customizable matching."""

from __future__ import annotations

import logging

from json_semantic_assert.algorithm.config import CompareMode, QueryDocument
from json_semantic_assert.algorithm.default import DefaultComparator
from json_semantic_assert.api import compare_json, compare_json_text, is_match
from json_semantic_assert.comparator import CustomizingComparator
from json_semantic_assert.customization import (
    IGNORE,
    ArrayValueMatcher,
    Customization,
    JSONPathCustomization,
    Matcher,
    MatcherKind,
    PathCustomization,
    RegularExpressionValueMatcher,
)
from json_semantic_assert.errors import (
    CustomizationError,
    InvalidQueryError,
    JSONCompareError,
    MatcherError,
    QueryResolutionError,
)
from json_semantic_assert.result import (
    ComparisonResult,
    FieldFailure,
    FieldMissing,
    FieldUnexpected,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "IGNORE",
    "ArrayValueMatcher",
    "CompareMode",
    "ComparisonResult",
    "CustomizationError",
    "Customization",
    "CustomizingComparator",
    "DefaultComparator",
    "FieldFailure",
    "FieldMissing",
    "FieldUnexpected",
    "InvalidQueryError",
    "JSONCompareError",
    "JSONPathCustomization",
    "Matcher",
    "MatcherError",
    "MatcherKind",
    "PathCustomization",
    "QueryDocument",
    "QueryResolutionError",
    "RegularExpressionValueMatcher",
    "compare_json",
    "compare_json_text",
    "is_match",
]
