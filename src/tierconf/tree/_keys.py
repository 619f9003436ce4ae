"""
Key path grammar.

A key path is a sequence of tiers joined by a separator, where the final
tier may carry bracketed suffixes:

- ``name[2]`` addresses one element of the array ``name``;
- ``name[1][0]`` indexes into nested arrays;
- ``name[]`` requests the length of ``name``.
"""

from __future__ import annotations

import re as _re

# Go-style Atoi: optional sign, digits only
_INDEX_RE = _re.compile(r"[+-]?[0-9]+")


def split_array_len(key: str) -> tuple[str, bool]:
    """
    Detect an array length request.

    Args:
        key: A single tier, e.g. ``"servers[]"``.

    Returns:
        Tuple of (name with the ``[]`` suffix removed, True) for a length
        request, otherwise (key, False).
    """
    if key.endswith("[]"):
        return key[:-2], True
    return key, False


def parse_array_element(key: str) -> tuple[str, list[int] | None]:
    """
    Split a tier into an array name and its element indices.

    Only the trailing ``[i][j]...`` groups are parsed. A malformed group
    (non-integer, unbalanced) means the tier is not an element reference.

    Args:
        key: A single tier, e.g. ``"matrix[1][0]"``.

    Returns:
        Tuple of (array name, indices). indices is None if the tier does
        not address an array element.
    """
    if not key.endswith("]"):
        return key, None
    start = key.find("[")
    if start == -1:
        return key, None
    indices: list[int] = []
    for part in key[start + 1 : -1].split("]["):
        if not _INDEX_RE.fullmatch(part):
            return key, None
        indices.append(int(part))
    return key[:start], indices
