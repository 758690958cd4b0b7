"""TreeBuilder: converts any valid JSON value into an identity-tagged TreeNode tree.

Uses recursive dispatch to convert JSON dicts, lists and scalar values into
``TreeNode`` objects.  Every node receives a fresh ``node_id`` from a
process-wide counter, so ids never collide between the expected and actual
trees of one comparison, nor between comparisons running on other threads.

Paths are rendered during traversal:
- Root is "" (empty string) unless a prefix is given
- Object children append ".{key}", array children append "[{index}]"
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from json_semantic_assert.tree.nodes import NodeType, TreeNode
from json_semantic_assert.tree.paths import join_index, join_key

# itertools.count.__next__ is atomic under the GIL: safe to share across threads.
_node_ids = itertools.count(1)

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | Decimal | bool | None


@dataclass
class TreeBuilder:
    """Converts any valid JSON value into an identity-tagged TreeNode tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Example::
        builder = TreeBuilder()
        tree = builder.build({"id": "123456", "more": [1, 2]})
        tree.fields["more"].elements[1].path   # "more[1]"
    """

    def build(self, value: JsonValue, path: str = "") -> TreeNode:
        """Convert a JSON value to a TreeNode tree.

        Args:
            value: Any valid JSON value (dict, list, str, int, float, Decimal,
                bool, None).
            path:  Rendered path of the root node.  Defaults to "" (root).

        Returns:
            The root TreeNode.

        Raises:
            TypeError: If value (or anything nested in it) is not a JSON value.
        """
        # CRITICAL: bool MUST be checked before int, bool subclasses int in Python
        if isinstance(value, bool):
            return self._leaf(NodeType.BOOLEAN, value, path)

        if isinstance(value, dict):
            return self._build_object(value, path)

        if isinstance(value, list):
            return self._build_array(value, path)

        if isinstance(value, str):
            return self._leaf(NodeType.STRING, value, path)

        if isinstance(value, (int, float, Decimal)):
            return self._leaf(NodeType.NUMBER, value, path)

        if value is None:
            return self._leaf(NodeType.NULL, None, path)

        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")

    def _leaf(self, node_type: NodeType, value: Any, path: str) -> TreeNode:
        return TreeNode(node_type=node_type, value=value, node_id=next(_node_ids), path=path)

    def _build_object(self, obj: dict[str, Any], path: str) -> TreeNode:
        node = TreeNode(
            node_type=NodeType.OBJECT, value=obj, node_id=next(_node_ids), path=path
        )
        for key, val in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, got {type(key)!r} at {path!r}")
            node.fields[key] = self.build(val, path=join_key(path, key))
        return node

    def _build_array(self, arr: list[Any], path: str) -> TreeNode:
        node = TreeNode(
            node_type=NodeType.ARRAY, value=arr, node_id=next(_node_ids), path=path
        )
        node.elements = [
            self.build(item, path=join_index(path, idx)) for idx, item in enumerate(arr)
        ]
        return node
