"""Exception hierarchy for json-semantic-assert.

Comparison mismatches are never raised: they are recorded in a
``ComparisonResult``.  The exceptions below cover the cases where a
comparison cannot meaningfully run at all (bad customizations, queries that
cannot be resolved) and the matcher-signalled message override.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "CustomizationError",
    "InvalidQueryError",
    "JSONCompareError",
    "MatcherError",
    "QueryResolutionError",
]


class JSONCompareError(Exception):
    """Base class for every error raised by this package."""


class CustomizationError(JSONCompareError, ValueError):
    """A customization, selector, matcher or registry is malformed.

    Raised at construction time, before any comparison begins.
    """


class InvalidQueryError(CustomizationError):
    """A JSONPath selector is not syntactically valid.

    The underlying ``jsonpath-ng`` exception is chained as ``__cause__``.
    """

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Invalid JSONPath {query!r}: {reason}")
        self.query = query


class QueryResolutionError(JSONCompareError):
    """A JSONPath selector could not be resolved against the document.

    Fatal: propagates out of the whole comparison call instead of being
    recorded as a field mismatch.
    """

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Cannot resolve JSONPath {query!r}: {reason}")
        self.query = query


class MatcherError(JSONCompareError):
    """Raised by a matcher to replace the generic failure message.

    The comparator catches it at the node being matched and records a field
    failure carrying ``str(error)`` as its message.

    Attributes:
        expected: Expected value the matcher was given (optional).
        actual:   Actual value the matcher was given (optional).
    """

    def __init__(self, message: str, expected: Any = None, actual: Any = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
