"""Public API functions for json-semantic-assert.

This module provides the user-facing functions: compare_json,
compare_json_text and is_match.  Each call creates a fresh
``CustomizingComparator`` to guarantee zero state shared between calls.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from json_semantic_assert.algorithm.config import CompareMode, QueryDocument
from json_semantic_assert.comparator import CustomizingComparator

if TYPE_CHECKING:
    from json_semantic_assert.customization.customization import Customization
    from json_semantic_assert.result import ComparisonResult

__all__ = ["compare_json", "compare_json_text", "is_match"]


def compare_json(
    expected: Any,
    actual: Any,
    mode: CompareMode | str = CompareMode.STRICT,
    customizations: Iterable[Customization] = (),
    query_document: QueryDocument | str = QueryDocument.EXPECTED,
) -> ComparisonResult:
    """Compare two JSON values and return a ComparisonResult.

    Args:
        expected:       Expected JSON value (dict, list, str, number, bool, None).
        actual:         Actual JSON value.
        mode:           Comparison mode.  Defaults to STRICT.
        customizations: Path-pattern or JSONPath customizations to apply.
        query_document: Document JSONPath selectors are evaluated against.

    Returns:
        A ``ComparisonResult``; ``passed`` is True when nothing was recorded.

    Raises:
        QueryResolutionError: If a JSONPath selector cannot be resolved.
    """
    comparator = CustomizingComparator(mode, customizations, query_document)
    return comparator.compare_json(expected, actual)


def compare_json_text(
    expected_text: str | bytes,
    actual_text: str | bytes,
    mode: CompareMode | str = CompareMode.STRICT,
    customizations: Iterable[Customization] = (),
    query_document: QueryDocument | str = QueryDocument.EXPECTED,
) -> ComparisonResult:
    """Parse two JSON texts and compare them.

    Non-integral numbers are parsed as ``Decimal`` so no precision is lost
    before comparison.

    Raises:
        json.JSONDecodeError: If either text is not valid JSON.
    """
    expected = json.loads(expected_text, parse_float=Decimal)
    actual = json.loads(actual_text, parse_float=Decimal)
    return compare_json(expected, actual, mode, customizations, query_document)


def is_match(
    expected: Any,
    actual: Any,
    mode: CompareMode | str = CompareMode.STRICT,
    customizations: Iterable[Customization] = (),
    query_document: QueryDocument | str = QueryDocument.EXPECTED,
) -> bool:
    """Return True if ``actual`` matches ``expected`` under ``mode``.

    Returns:
        ``compare_json(...).passed``.
    """
    return compare_json(expected, actual, mode, customizations, query_document).passed
