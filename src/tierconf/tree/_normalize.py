"""
Ingestion-time normalization of decoded trees.

Decoders disagree on key typing: YAML happily produces integer or boolean
mapping keys, while JSON only produces strings. Sources call normalize()
once after decoding so the resolver only ever sees string-keyed nodes.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing


def normalize_key(key: _typing.Any) -> str:
    """Render a mapping key as a path tier."""
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def normalize(tree: _typing.Any) -> _typing.Any:
    """
    Return a copy of a decoded tree with every mapping keyed by strings.

    Mappings become plain dicts and tuples become lists. Leaves are
    returned unchanged.

    Args:
        tree: Any decoded value.

    Returns:
        The normalized value.
    """
    if isinstance(tree, _abc.Mapping):
        return {normalize_key(k): normalize(v) for k, v in tree.items()}
    if isinstance(tree, (list, tuple)):
        return [normalize(v) for v in tree]
    return tree
