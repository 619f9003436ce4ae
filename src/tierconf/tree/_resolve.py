"""
Key path resolution against decoded configuration trees.

Nodes are mappings, arrays are lists or tuples, and anything else is a
leaf. Resolution never converts types and never raises: every failure
(absent key, node requested as a leaf, index out of range, path that
overshoots a leaf) is reported as ``(None, False)``.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import tierconf.constants as constants
import tierconf.tree._keys as _keys
import tierconf.tree._types as _types


def is_node(value: _typing.Any) -> bool:
    """Check whether a value is a node (a mapping of child tiers)."""
    return isinstance(value, _abc.Mapping)


def is_array(value: _typing.Any) -> bool:
    """Check whether a value is an array (strings and bytes are leaves)."""
    return isinstance(value, (list, tuple))


def _is_node_array(value: _typing.Any) -> bool:
    return is_array(value) and len(value) > 0 and is_node(value[0])


def resolve(
    tree: _typing.Any,
    key: str,
    separator: str = constants.DEFAULT_SEPARATOR,
) -> _types.Lookup:
    """
    Resolve a key path against a configuration tree.

    Resolution order at each node:

    1. The whole key as a direct child. Flat sources (e.g. environment
       variables) store dotted keys verbatim, so this also serves them.
    2. The key split once on the separator into (head, remainder), with
       the remainder resolved inside the ``head`` node.
    3. Array addressing on the first tier: ``name[i]...`` indexing and the
       ``name[]`` length request.

    Args:
        tree: Root node of the tree. Non-mapping roots resolve nothing.
        key: Key path, e.g. ``"db.hosts[0]"`` or ``"db.hosts[]"``.
        separator: Tier separator. An empty separator disables splitting.

    Returns:
        Tuple of (value, found). Nodes are never returned as values;
        an array of nodes is returned as a NodeArray.
    """
    if not key or not is_node(tree):
        return _types.NOT_FOUND
    return _resolve_in(tree, key, separator)


def _resolve_in(
    node: _abc.Mapping[_typing.Any, _typing.Any],
    key: str,
    separator: str,
) -> _types.Lookup:
    # Full key match, which also handles plain leaves
    if key in node:
        return _leaf(node[key])

    length_request = False
    path = key.split(separator, 1) if separator else [key]
    if len(path) > 1:
        head, remainder = path
        if head in node:
            return resolve(node[head], remainder, separator)
    else:
        path[0], length_request = _keys.split_array_len(path[0])

    name, indices = _keys.parse_array_element(path[0])
    if (length_request or indices is not None) and name in node:
        remainder = path[1] if len(path) > 1 else None
        return _element(node[name], remainder, separator, indices or [], length_request)
    return _types.NOT_FOUND


def _element(
    value: _typing.Any,
    remainder: str | None,
    separator: str,
    indices: list[int],
    length_request: bool,
) -> _types.Lookup:
    for index in indices:
        if not is_array(value) or not 0 <= index < len(value):
            return _types.NOT_FOUND
        value = value[index]

    if is_node(value):
        if remainder:
            return _resolve_in(value, remainder, separator)
        return _types.NOT_FOUND
    if remainder:
        # path overshoots a leaf
        return _types.NOT_FOUND
    if length_request:
        if is_array(value):
            return len(value), True
        return _types.NOT_FOUND
    if _is_node_array(value):
        return _types.NodeArray(len(value)), True
    return value, True


def _leaf(value: _typing.Any) -> _types.Lookup:
    if is_node(value):
        return _types.NOT_FOUND
    if _is_node_array(value):
        return _types.NodeArray(len(value)), True
    return value, True
