"""
Value types produced by the tree resolver.

The resolver works directly on decoded Python trees (dicts, lists and
scalars). The only type it introduces is NodeArray, the stand-in returned
for an array whose elements are nodes.
"""

from __future__ import annotations

import typing as _typing


class NodeArray(tuple):  # type: ignore[type-arg]
    """
    Opaque stand-in for an array of nodes (e.g. a list of objects).

    Nodes are not retrievable through a flat key, so an array of them is
    reported by shape only: its length is preserved and every element is
    a ``None`` placeholder. Individual objects are reached either by
    indexing into them (``servers[0].host``) or by unmarshalling.

    Example:
        >>> arr = NodeArray(2)
        >>> len(arr), arr
        (2, NodeArray(2))
    """

    __slots__ = ()

    def __new__(cls, length: int) -> NodeArray:
        return super().__new__(cls, (None,) * length)

    def __getnewargs__(self) -> tuple[int]:  # type: ignore[override]
        return (len(self),)

    def __repr__(self) -> str:
        return f"NodeArray({len(self)})"


# Result of a lookup: (value, found). value is None when found is False.
Lookup: _typing.TypeAlias = tuple[_typing.Any, bool]

NOT_FOUND: Lookup = (None, False)
