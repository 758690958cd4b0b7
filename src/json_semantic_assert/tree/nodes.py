"""TreeNode dataclass and NodeType StrEnum for identity-tagged JSON trees.

A comparison walks two ``TreeNode`` trees in parallel.  Each node carries an
integer ``node_id`` assigned when the tree is built: that id is the node's
identity.  Two structurally equal values at different locations are distinct
nodes with distinct ids, which is what lets a JSONPath match be attributed to
exactly one visited node.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from json_semantic_assert.tree.paths import Segment


class NodeType(StrEnum):
    """The six JSON value kinds.

    StrEnum values are the lowercased member names:
    - OBJECT  -> "object"
    - ARRAY   -> "array"
    - STRING  -> "string"
    - NUMBER  -> "number"  : int, float and Decimal alike
    - BOOLEAN -> "boolean"
    - NULL    -> "null"
    """

    OBJECT = auto()
    ARRAY = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()


@dataclass(slots=True, eq=False)
class TreeNode:
    """A node in the identity-tagged JSON tree.

    Equality is identity (``eq=False``): comparing nodes structurally is the
    comparator's job, not the node's.

    Attributes:
        node_type: Which JSON kind this node holds.
        value:     The original Python value (containers included).
        node_id:   Identity token, unique across every tree built in the process.
        path:      Rendered location of this node inside its own document.
        fields:    Children of an OBJECT node, by key, in document order.
        elements:  Children of an ARRAY node, by position.
    """

    node_type: NodeType
    value: Any
    node_id: int
    path: str = ""
    fields: dict[str, TreeNode] = field(default_factory=dict)
    elements: list[TreeNode] = field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return self.node_type in (NodeType.OBJECT, NodeType.ARRAY)

    def child(self, segment: Segment) -> TreeNode | None:
        """Return the direct child addressed by ``segment``, or None.

        String segments address object fields; integer segments address array
        elements (negative indices count from the end).  An integer segment on
        an object addresses its values in document order, which is how
        JSONPath filters applied to objects report their matches.
        """
        if self.node_type == NodeType.OBJECT:
            if isinstance(segment, str):
                return self.fields.get(segment)
            values = list(self.fields.values())
            return values[segment] if -len(values) <= segment < len(values) else None
        if self.node_type == NodeType.ARRAY and isinstance(segment, int):
            n = len(self.elements)
            return self.elements[segment] if -n <= segment < n else None
        return None

    def locate(self, segments: Iterable[Segment]) -> TreeNode | None:
        """Walk ``segments`` down from this node; None if any step is missing."""
        node: TreeNode | None = self
        for segment in segments:
            if node is None:
                return None
            node = node.child(segment)
        return node
