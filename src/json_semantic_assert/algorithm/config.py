"""CompareMode, ModePolicy and QueryDocument: comparison configuration.

``CompareMode`` selects the strictness of one comparison call.  The rules a
mode implies live in a single read-only decision table of frozen
``ModePolicy`` records, so a mode can never be altered mid-traversal.

| mode           | extra fields | array order | array lengths must match |
|----------------|--------------|-------------|--------------------------|
| STRICT         | forbidden    | ignored     | no                       |
| LENIENT        | allowed      | ignored     | no                       |
| NON_EXTENSIBLE | forbidden    | ignored     | yes                      |
| STRICT_ORDER   | forbidden    | enforced    | yes                      |
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ModePolicy:
    """Immutable rule set implied by a ``CompareMode``.

    Attributes:
        extensible:    Actual documents may carry fields (and, in unordered
            arrays, elements) the expected document does not.
        strict_order:  Arrays are compared index for index.
        strict_length: Arrays of different lengths fail outright, citing both
            lengths, without comparing elements.
    """

    extensible: bool
    strict_order: bool
    strict_length: bool


class CompareMode(StrEnum):
    """Strictness policy for one comparison call.

    - STRICT:         no extra fields, arrays compared as unordered multisets.
    - LENIENT:        extra fields allowed, arrays unordered.
    - NON_EXTENSIBLE: no extra fields, arrays unordered, lengths must match.
    - STRICT_ORDER:   no extra fields, arrays compared element by element.
    """

    STRICT = auto()
    LENIENT = auto()
    NON_EXTENSIBLE = auto()
    STRICT_ORDER = auto()

    @classmethod
    def _missing_(cls, value: object) -> CompareMode | None:
        # Accept member names as well ("STRICT_ORDER" as well as "strict_order").
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None

    @property
    def policy(self) -> ModePolicy:
        return policy_for(self)

    @property
    def is_extensible(self) -> bool:
        return policy_for(self).extensible

    @property
    def has_strict_order(self) -> bool:
        return policy_for(self).strict_order

    @property
    def has_strict_length(self) -> bool:
        return policy_for(self).strict_length


class QueryDocument(StrEnum):
    """Which document JSONPath selectors are evaluated against.

    - EXPECTED: the expected document; a selector applies to a comparison
      point when the expected node there is one of the query's matches.
    - ACTUAL:   the actual document, matched against the actual node instead.
    """

    EXPECTED = auto()
    ACTUAL = auto()


_POLICIES: MappingProxyType[CompareMode, ModePolicy] = MappingProxyType(
    {
        CompareMode.STRICT: ModePolicy(extensible=False, strict_order=False, strict_length=False),
        CompareMode.LENIENT: ModePolicy(extensible=True, strict_order=False, strict_length=False),
        CompareMode.NON_EXTENSIBLE: ModePolicy(
            extensible=False, strict_order=False, strict_length=True
        ),
        CompareMode.STRICT_ORDER: ModePolicy(
            extensible=False, strict_order=True, strict_length=True
        ),
    }
)


def policy_for(mode: CompareMode | str) -> ModePolicy:
    """Return the ``ModePolicy`` for ``mode``.

    Raises:
        ValueError: If ``mode`` is a string naming no ``CompareMode``.
    """
    return _POLICIES[CompareMode(mode)]
