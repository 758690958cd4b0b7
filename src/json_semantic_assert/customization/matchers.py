"""Matchers: the value checks a customization applies in place of equality.

A matcher is stored as a tagged ``Matcher(kind, func)``.  The tag decides the
calling convention once, at construction:

- ``MatcherKind.PLAIN``:          ``func(expected, actual) -> bool``
- ``MatcherKind.LOCATION_AWARE``: ``func(path, expected, actual, result) -> bool``

``as_matcher`` turns whatever the user supplied (a ``Matcher``, an object
satisfying one of the protocols in ``json_semantic_assert.protocols``, or a
bare callable) into a ``Matcher``.

Built-in matchers:

- ``IGNORE``: accepts anything.
- ``RegularExpressionValueMatcher``: the actual value must fully match a
  regular expression, either a constant one or the expected value itself.
- ``ArrayValueMatcher``: compares a range of actual array elements against
  the expected element(s) with a comparator, recording per-element outcomes.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from json_semantic_assert.errors import CustomizationError, MatcherError
from json_semantic_assert.protocols import LocationAwareValueMatcher, ValueMatcher
from json_semantic_assert.tree.paths import join_index

if TYPE_CHECKING:
    from json_semantic_assert.algorithm.default import DefaultComparator
    from json_semantic_assert.result import ComparisonResult

__all__ = [
    "IGNORE",
    "ArrayValueMatcher",
    "Matcher",
    "MatcherKind",
    "RegularExpressionValueMatcher",
    "as_matcher",
]


class MatcherKind(StrEnum):
    """Calling convention of a matcher."""

    PLAIN = auto()
    LOCATION_AWARE = auto()


@dataclass(frozen=True, slots=True)
class Matcher:
    """A matcher function tagged with its calling convention.

    Attributes:
        kind: How ``func`` is called.
        func: The check itself.  Returns True to accept, False to reject, or
            raises ``MatcherError`` to reject with a custom message.
    """

    kind: MatcherKind
    func: Callable[..., bool]

    @classmethod
    def plain(cls, func: Callable[[Any, Any], bool]) -> Matcher:
        return cls(MatcherKind.PLAIN, func)

    @classmethod
    def location_aware(cls, func: Callable[[str, Any, Any, ComparisonResult], bool]) -> Matcher:
        return cls(MatcherKind.LOCATION_AWARE, func)

    def evaluate(self, path: str, expected: Any, actual: Any, result: ComparisonResult) -> bool:
        """Run the check with the arguments its kind expects."""
        if self.kind == MatcherKind.LOCATION_AWARE:
            return bool(self.func(path, expected, actual, result))
        return bool(self.func(expected, actual))


def as_matcher(obj: Any) -> Matcher:
    """Coerce a user-supplied matcher into a tagged ``Matcher``.

    Args:
        obj: A ``Matcher``; an object with ``equal_at(path, expected, actual,
            result)``; an object with ``equal(expected, actual)``; or a
            callable ``(expected, actual) -> bool``.  Checked in that order.

    Returns:
        The tagged ``Matcher``.

    Raises:
        CustomizationError: If ``obj`` is None or satisfies none of the above.
    """
    if obj is None:
        raise CustomizationError("A customization needs a matcher, got None")
    if isinstance(obj, Matcher):
        return obj
    if isinstance(obj, LocationAwareValueMatcher):
        return Matcher.location_aware(obj.equal_at)
    if isinstance(obj, ValueMatcher):
        return Matcher.plain(obj.equal)
    if callable(obj):
        return Matcher.plain(obj)
    raise CustomizationError(f"Not a usable matcher: {obj!r}")


def _always_equal(expected: Any, actual: Any) -> bool:
    return True


IGNORE = Matcher.plain(_always_equal)


class RegularExpressionValueMatcher:
    """Accepts an actual value whose text fully matches a regular expression.

    With a constant ``pattern`` every actual value is checked against it.
    Without one, the expected value itself is compiled and used as the
    pattern, so an expected document can carry its own patterns.

    Example::

        RegularExpressionValueMatcher(r"\\d+").equal("ignored", 42)   # True
        RegularExpressionValueMatcher().equal(r"0-\\d+", "0-7")        # True
    """

    def __init__(self, pattern: str | None = None) -> None:
        """Initialise the matcher.

        Raises:
            CustomizationError: If ``pattern`` is not a valid regular expression.
        """
        try:
            self._pattern = re.compile(pattern) if pattern is not None else None
        except re.error as exc:
            raise CustomizationError(f"Invalid regular expression {pattern!r}: {exc}") from exc

    @property
    def pattern(self) -> str | None:
        return self._pattern.pattern if self._pattern is not None else None

    def equal(self, expected: Any, actual: Any) -> bool:
        text = str(actual)
        if self._pattern is not None:
            if self._pattern.fullmatch(text) is None:
                raise MatcherError(
                    f"Constant expected pattern did not match value: {self._pattern.pattern!r}",
                    expected,
                    actual,
                )
            return True

        try:
            dynamic = re.compile(str(expected))
        except re.error as exc:
            raise MatcherError(
                f"Dynamic expected pattern is invalid: {exc}", expected, actual
            ) from exc
        if dynamic.fullmatch(text) is None:
            raise MatcherError(
                f"Dynamic expected pattern did not match value: {dynamic.pattern!r}",
                expected,
                actual,
            )
        return True


class ArrayValueMatcher:
    """Compares a range of actual array elements against expected element(s).

    Every actual element with an index in ``[first, last]`` is compared with
    the expected element at the same offset from ``first``, cycling through
    the expected array when it is shorter (a single expected element is thus
    checked against every selected actual element).  A non-array expected
    value is treated as a one-element array.

    Outcomes are written to the result at ``path[i]`` through
    ``comparator.compare_values``; the matcher itself always accepts.

    Example::

        matcher = ArrayValueMatcher(DefaultComparator(), first=1)
        # expected {"a": [{"id": 0}]} vs actual {"a": [{"id": 5}, {"id": 0}, {"id": 0}]}
        # checks a[1] and a[2] only.
    """

    def __init__(
        self, comparator: DefaultComparator, first: int = 0, last: int | None = None
    ) -> None:
        """Initialise the matcher.

        Args:
            comparator: Comparator used for each selected element.
            first:      First actual index to check (clamped to 0).
            last:       Last actual index to check, inclusive.  None means the
                last element of the actual array.

        Raises:
            CustomizationError: If ``last`` is smaller than ``first``.
        """
        if last is not None and last < first:
            raise CustomizationError(f"Array range end {last} is before its start {first}")
        self._comparator = comparator
        self._first = first
        self._last = last

    def equal_at(self, path: str, expected: Any, actual: Any, result: ComparisonResult) -> bool:
        if not isinstance(actual, list):
            raise MatcherError("ArrayValueMatcher applied to a non-array value", expected, actual)
        expected_elems = expected if isinstance(expected, list) else [expected]
        if not expected_elems:
            raise MatcherError("ArrayValueMatcher needs at least one expected element", expected, actual)

        start = max(0, self._first)
        stop = len(actual) - 1 if self._last is None else min(len(actual) - 1, self._last)
        for i in range(start, stop + 1):
            template = expected_elems[(i - start) % len(expected_elems)]
            self._comparator.compare_values(join_index(path, i), template, actual[i], result)
        return True
