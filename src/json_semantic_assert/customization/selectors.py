"""Selectors: which nodes a customization applies to.

Two selector forms exist:

- Path patterns: dotted key patterns matched against the rendered location
  of a node (``store.book[*].price``, ``*.id``).  A segment of ``*`` matches
  any one key or array index; ``[n]``, ``[n,m,...]`` and ``[*]`` after a key
  select array indices.  Matching needs no access to the documents.
- JSONPath queries: compiled with ``jsonpath_ng.ext.parse`` and resolved
  against a whole document (see ``resolver.py``).

Compiled JSONPath objects are shared process-wide through a
``cachetools.LRUCache`` guarded by a lock; compiled queries are immutable, so
one object may be evaluated from any number of threads.
"""

from __future__ import annotations

import logging
import re
import threading

from cachetools import LRUCache, cached
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as jsonpath_parse
from jsonpath_ng.jsonpath import Child, Fields, Index, JSONPath, Root, This

from json_semantic_assert.errors import CustomizationError, InvalidQueryError

__all__ = ["PathPattern", "compile_query", "is_definite"]

logger = logging.getLogger(__name__)

_KEY = r"[^.\[\]]+"
_SEGMENT_RE = re.compile(r"(?P<key>[^\[\]]*)(?P<indices>(?:\[[^\[\]]*\])*)")
_INDEX_GROUP_RE = re.compile(r"\[([^\[\]]*)\]")
_INDEX_LIST_RE = re.compile(r"\s*\d+\s*(?:,\s*\d+\s*)*")


class PathPattern:
    """A compiled path pattern, matched against whole rendered paths.

    Example::

        pattern = PathPattern("store.book[*].price")
        pattern.matches("store.book[3].price")    # True
        pattern.matches("store.bicycle.price")    # False
    """

    __slots__ = ("_regex", "_text")

    def __init__(self, text: str) -> None:
        """Compile ``text``.

        Raises:
            CustomizationError: If ``text`` is None, blank or malformed.
        """
        if text is None or not str(text).strip():
            raise CustomizationError("A path pattern must be a non-blank string")
        self._text = str(text).strip()
        self._regex = re.compile(self._translate(self._text))

    @property
    def text(self) -> str:
        return self._text

    def matches(self, path: str) -> bool:
        return self._regex.fullmatch(path) is not None

    def _translate(self, text: str) -> str:
        parts: list[str] = []
        for position, segment in enumerate(text.split(".")):
            m = _SEGMENT_RE.fullmatch(segment)
            if m is None or not (m.group("key") or m.group("indices")):
                raise CustomizationError(f"Malformed path pattern {text!r}: bad segment {segment!r}")
            key, indices = m.group("key"), m.group("indices")
            dot = r"\." if position else ""

            if key == "*":
                parts.append(rf"(?:{dot}{_KEY}|\[\d+\])")
            elif key:
                parts.append(dot + re.escape(key))
            elif position:
                # an index group may only follow a key, except at the root
                raise CustomizationError(f"Malformed path pattern {text!r}: empty segment")

            for group in _INDEX_GROUP_RE.findall(indices):
                parts.append(self._translate_indices(text, group))
        return "".join(parts)

    @staticmethod
    def _translate_indices(text: str, group: str) -> str:
        if group.strip() == "*":
            return r"\[\d+\]"
        if _INDEX_LIST_RE.fullmatch(group) is None:
            raise CustomizationError(f"Malformed path pattern {text!r}: bad index list [{group}]")
        choices = "|".join(str(int(i)) for i in group.split(","))
        return rf"\[(?:{choices})\]"

    def __repr__(self) -> str:
        return f"PathPattern({self._text!r})"


@cached(LRUCache(maxsize=256), lock=threading.Lock())
def _parse(text: str) -> JSONPath:
    logger.debug("Compiling JSONPath %r", text)
    return jsonpath_parse(text)


def compile_query(text: str) -> JSONPath:
    """Compile a JSONPath query, reusing a previously compiled one when possible.

    Args:
        text: The query.  ``$``-prefixed and bare root-relative forms are
            equivalent.

    Returns:
        The compiled ``jsonpath_ng`` expression.

    Raises:
        CustomizationError: If ``text`` is None or blank.
        InvalidQueryError:  If ``text`` is not valid JSONPath.
    """
    if text is None or not str(text).strip():
        raise CustomizationError("A JSONPath selector must be a non-blank string")
    query = str(text).strip()
    try:
        return _parse(query)
    except JSONPathError as exc:
        raise InvalidQueryError(query, str(exc)) from exc


def _single_index(node: Index) -> bool:
    # jsonpath-ng >= 1.7 stores a tuple of indices, older releases a single one
    indices = getattr(node, "indices", None)
    return indices is None or len(indices) == 1


def is_definite(query: JSONPath) -> bool:
    """Whether ``query`` designates at most one node by construction.

    Definite queries use only the root, plain field names and single
    indices.  Wildcards, slices, unions, filters and recursive descent make a
    query indefinite.
    """
    if isinstance(query, (Root, This)):
        return True
    if isinstance(query, Child):
        return is_definite(query.left) and is_definite(query.right)
    if isinstance(query, Fields):
        return len(query.fields) == 1 and query.fields[0] != "*"
    if isinstance(query, Index):
        return _single_index(query)
    return False
