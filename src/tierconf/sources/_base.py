"""
Getter protocol shared by all sources.

A getter answers ``get(key) -> (value, found)``. Node keys must report
``(None, False)`` even when the node exists, since only leaves are
retrievable as values. Getters must be safe to call from multiple threads.

Sources that can re-read their backing store also implement
``reload() -> bool``, returning True when the content changed.
"""

from __future__ import annotations

import typing as _typing


@_typing.runtime_checkable
class Getter(_typing.Protocol):
    """Minimal interface of a configuration source."""

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        """Return (value, True) for a leaf key, (None, False) otherwise."""
        ...


@_typing.runtime_checkable
class Reloadable(_typing.Protocol):
    """A getter that can refresh its snapshot from its backing store."""

    def reload(self) -> bool:
        """Re-read the backing store. Returns True if the content changed."""
        ...


class GetterFunc:
    """Adapt a plain ``key -> (value, found)`` callable to the Getter protocol."""

    def __init__(self, func: _typing.Callable[[str], tuple[_typing.Any, bool]]) -> None:
        self._func = func

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        return self._func(key)


def reload_getter(getter: _typing.Any) -> bool:
    """Reload a getter if it supports reloading. Returns True if it changed."""
    if isinstance(getter, Reloadable):
        return bool(getter.reload())
    return False
