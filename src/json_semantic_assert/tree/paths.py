"""Rendering of location paths.

Paths are rendered the way failures are reported: object keys joined by
dots, array indices in brackets (``store.book[2].title``).  The root path is
the empty string and a top-level array element renders as ``[0]``.
"""

from __future__ import annotations

from collections.abc import Iterable

Segment = str | int


def join_key(prefix: str, key: str) -> str:
    """Append an object key to ``prefix``."""
    return key if not prefix else f"{prefix}.{key}"


def join_index(prefix: str, index: int) -> str:
    """Append an array index to ``prefix``."""
    return f"{prefix}[{index}]"


def render_path(segments: Iterable[Segment]) -> str:
    """Render a sequence of key/index segments as a dotted path."""
    path = ""
    for segment in segments:
        # bool is an int subclass but never a valid index
        if isinstance(segment, int) and not isinstance(segment, bool):
            path = join_index(path, segment)
        else:
            path = join_key(path, str(segment))
    return path
