"""ComparisonResult: the accumulator every comparator writes its outcomes to.

A fresh ``ComparisonResult`` is created per top-level comparison and mutated
throughout the recursion.  It holds three ordered lists of outcome records:

- field failures:   a value was found but did not match,
- missing fields:   an expected value had no counterpart in the actual document,
- unexpected fields: the actual document had a value the expected one did not.

The comparison passed iff all three lists are empty.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_semantic_assert.errors import MatcherError

__all__ = ["ComparisonResult", "FieldFailure", "FieldMissing", "FieldUnexpected"]


def describe(value: Any) -> str:
    """Render a JSON value compactly for failure messages."""
    try:
        return json.dumps(value, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(value)


@dataclass(frozen=True, slots=True)
class FieldFailure:
    """A value at ``path`` did not match.

    Attributes:
        path:     Rendered location of the mismatch.
        expected: Expected value (or expected array length for length failures).
        actual:   Actual value (or actual array length).
        message:  Custom message from a matcher or a structural rule; None for
            a plain value mismatch.
    """

    path: str
    expected: Any
    actual: Any
    message: str | None = None

    def describe(self) -> str:
        if self.message is not None:
            return f"{self.path}: {self.message}" if self.path else self.message
        return (
            f"{self.path}\nExpected: {describe(self.expected)}\n"
            f"     got: {describe(self.actual)}\n"
        )


@dataclass(frozen=True, slots=True)
class FieldMissing:
    """An expected value at ``path`` was absent from the actual document."""

    path: str
    expected: Any

    def describe(self) -> str:
        return f"{self.path}\nExpected: {describe(self.expected)}\n     but none found\n"


@dataclass(frozen=True, slots=True)
class FieldUnexpected:
    """The actual document holds a value at ``path`` the expected one does not."""

    path: str
    actual: Any

    def describe(self) -> str:
        return f"{self.path}\nUnexpected: {describe(self.actual)}\n"


@dataclass(slots=True)
class ComparisonResult:
    """Mutable sink of field-level outcomes for one comparison call.

    Never shared across unrelated comparisons: the call that creates it owns
    it.  Location-aware matchers receive it and may record their own
    outcomes.

    Example::

        result = ComparisonResult()
        result.fail("store.bicycle.price", 19.95, 1.0)
        result.passed           # False
        result.field_failures   # [FieldFailure(path="store.bicycle.price", ...)]
    """

    field_failures: list[FieldFailure] = field(default_factory=list)
    field_missing: list[FieldMissing] = field(default_factory=list)
    field_unexpected: list[FieldUnexpected] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Verdict
    # ------------------------------------------------------------------

    @property
    def passed(self) -> bool:
        """True iff no failure, missing or unexpected field was recorded."""
        return not (self.field_failures or self.field_missing or self.field_unexpected)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def outcome_count(self) -> int:
        """Total number of recorded outcomes across the three lists."""
        return len(self.field_failures) + len(self.field_missing) + len(self.field_unexpected)

    @property
    def message(self) -> str:
        """Human-readable summary of every recorded outcome, joined by " ; "."""
        parts = [f.describe() for f in self.field_failures]
        parts += [m.describe() for m in self.field_missing]
        parts += [u.describe() for u in self.field_unexpected]
        return " ; ".join(parts)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def fail(
        self, path: str, expected: Any, actual: Any, message: str | None = None
    ) -> ComparisonResult:
        """Record a field failure at ``path``.  Returns self for chaining."""
        self.field_failures.append(FieldFailure(path, expected, actual, message))
        return self

    def fail_with(
        self, path: str, error: MatcherError, expected: Any = None, actual: Any = None
    ) -> ComparisonResult:
        """Record a failure whose message comes from a matcher's ``MatcherError``.

        The values carried by ``error`` are recorded; ``expected`` and
        ``actual`` stand in for any the error was raised without.
        """
        return self.fail(
            path,
            expected if error.expected is None else error.expected,
            actual if error.actual is None else error.actual,
            message=str(error),
        )

    def missing(self, path: str, expected: Any) -> ComparisonResult:
        """Record that the expected value at ``path`` was not found."""
        self.field_missing.append(FieldMissing(path, expected))
        return self

    def unexpected(self, path: str, actual: Any) -> ComparisonResult:
        """Record an actual value at ``path`` that the expected document lacks."""
        self.field_unexpected.append(FieldUnexpected(path, actual))
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_failure_on_field(self) -> bool:
        return bool(self.field_failures)

    def is_missing_on_field(self) -> bool:
        return bool(self.field_missing)

    def is_unexpected_on_field(self) -> bool:
        return bool(self.field_unexpected)

    def paths(self) -> list[str]:
        """Every recorded path, failures first, then missing, then unexpected."""
        return (
            [f.path for f in self.field_failures]
            + [m.path for m in self.field_missing]
            + [u.path for u in self.field_unexpected]
        )
