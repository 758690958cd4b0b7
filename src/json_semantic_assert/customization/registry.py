"""CustomizationRegistry: the ordered set of customizations of a comparator."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from json_semantic_assert.customization.customization import Customization
from json_semantic_assert.errors import CustomizationError

if TYPE_CHECKING:
    from json_semantic_assert.algorithm.context import TraversalContext
    from json_semantic_assert.tree.nodes import TreeNode

__all__ = ["CustomizationRegistry"]


class CustomizationRegistry:
    """Immutable, ordered collection of customizations.

    Holds no per-call state: JSONPath results live in the ``TraversalContext``
    handed to ``find_applicable``.
    """

    __slots__ = ("_customizations",)

    def __init__(self, customizations: Iterable[Customization] = ()) -> None:
        """Initialise the registry.

        Raises:
            CustomizationError: If an entry is not a ``Customization``.
        """
        items = tuple(customizations)
        for item in items:
            if not isinstance(item, Customization):
                raise CustomizationError(f"Not a customization: {item!r}")
        self._customizations = items

    def __len__(self) -> int:
        return len(self._customizations)

    def __iter__(self) -> Iterator[Customization]:
        return iter(self._customizations)

    def find_applicable(
        self, path: str, expected: TreeNode, actual: TreeNode, context: TraversalContext
    ) -> list[Customization]:
        """Every customization that applies at this comparison point, in order.

        Raises:
            QueryResolutionError: If a JSONPath selector cannot be resolved.
        """
        return [c for c in self._customizations if c.applies_to(path, expected, actual, context)]
