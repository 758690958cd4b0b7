"""Matcher Protocols for the customization extension point.

Defines the structural interfaces a matcher object may satisfy.  Users can
plug in custom matchers without inheriting from any base class: any object
with a conformant ``equal`` (or ``equal_at``) method passes ``isinstance``
checks, and a bare callable ``(expected, actual) -> bool`` works too.

Example::

    from json_semantic_assert.protocols import ValueMatcher

    class CaseInsensitive:
        def equal(self, expected, actual) -> bool:
            return str(expected).lower() == str(actual).lower()

    assert isinstance(CaseInsensitive(), ValueMatcher)  # structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_semantic_assert.result import ComparisonResult


@runtime_checkable
class ValueMatcher(Protocol):
    """Decides whether two raw JSON values match.

    ``equal`` returns True to accept, False to reject, or raises
    ``MatcherError`` to reject with a custom message.
    """

    def equal(self, expected: Any, actual: Any) -> bool: ...


@runtime_checkable
class LocationAwareValueMatcher(Protocol):
    """A matcher that also receives the location and the result accumulator.

    It may record its own outcomes in ``result`` (for instance, one failure
    per mismatching array element) and then return True so the comparator
    does not add a generic failure on top.
    """

    def equal_at(self, path: str, expected: Any, actual: Any, result: ComparisonResult) -> bool: ...
