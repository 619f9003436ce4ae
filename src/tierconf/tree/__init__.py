"""
Tree resolver.

Resolves dotted/bracketed key paths against decoded configuration trees.

Example:
    >>> import tierconf.tree as tree
    >>> cfg = {"nested": {"leaf": "44", "slice": ["c", "d"]}}
    >>> tree.resolve(cfg, "nested.leaf")
    ('44', True)
    >>> tree.resolve(cfg, "nested.slice[]")
    (2, True)
    >>> tree.resolve(cfg, "nested")
    (None, False)
"""

from tierconf.tree._keys import parse_array_element, split_array_len
from tierconf.tree._normalize import normalize, normalize_key
from tierconf.tree._resolve import is_array, is_node, resolve
from tierconf.tree._types import NOT_FOUND, Lookup, NodeArray

__all__ = [
    "NOT_FOUND",
    "Lookup",
    "NodeArray",
    "is_array",
    "is_node",
    "normalize",
    "normalize_key",
    "parse_array_element",
    "resolve",
    "split_array_len",
]
