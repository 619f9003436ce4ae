"""
Composition of getters.

- Overlay: immutable list of getters, first hit wins.
- Stack: like Overlay, but getters can be added after construction.
- Prefixed: relocates a getter's tree under a node of the config space.
- Mapped: rewrites keys before passing them to a getter.
- Aliased: falls back to alternate (e.g. legacy) keys when a key misses.
"""

from __future__ import annotations

import re as _re
import threading as _threading
import typing as _typing

import tierconf.constants as constants
import tierconf.keys as keys
import tierconf.sources._base as _base
import tierconf.tree as tree


class Overlay:
    """
    Searches getters in order, returning the first value found.

    Nested overlays are flattened and None entries ignored.
    """

    def __init__(self, *getters: _base.Getter | None) -> None:
        flattened: list[_base.Getter] = []
        for getter in getters:
            if getter is None:
                continue
            if isinstance(getter, Overlay):
                flattened.extend(getter.getters)
                continue
            flattened.append(getter)
        self._getters = tuple(flattened)

    @property
    def getters(self) -> tuple[_base.Getter, ...]:
        return self._getters

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        for getter in self._getters:
            value, found = getter.get(key)
            if found:
                return value, True
        return tree.NOT_FOUND

    def reload(self) -> bool:
        """Reload every reloadable getter. Returns True if any changed."""
        return any([_base.reload_getter(g) for g in self._getters])


class Stack:
    """
    A mutable Overlay.

    The lock only protects the list of getters, not the getters
    themselves, which must be thread-safe on their own.
    """

    def __init__(self, *getters: _base.Getter | None) -> None:
        self._lock = _threading.RLock()
        self._getters: list[_base.Getter] = [g for g in getters if g is not None]

    def append(self, getter: _base.Getter | None) -> None:
        """Add a getter searched after all existing getters."""
        if getter is None:
            return
        with self._lock:
            self._getters.append(getter)

    def insert(self, getter: _base.Getter | None) -> None:
        """Add a getter searched before all existing getters."""
        if getter is None:
            return
        with self._lock:
            self._getters.insert(0, getter)

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        with self._lock:
            getters = list(self._getters)
        for getter in getters:
            value, found = getter.get(key)
            if found:
                return value, True
        return tree.NOT_FOUND

    def reload(self) -> bool:
        with self._lock:
            getters = list(self._getters)
        return any([_base.reload_getter(g) for g in getters])


class Prefixed:
    """
    Relocates a getter under a node.

    With prefix ``"module."``, a get of ``"module.field"`` reads
    ``"field"`` from the wrapped getter. Keys outside the prefix miss.
    """

    def __init__(self, prefix: str, getter: _base.Getter) -> None:
        self._prefix = prefix
        self._getter = getter

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        if not key.startswith(self._prefix):
            return tree.NOT_FOUND
        return self._getter.get(key[len(self._prefix) :])

    def reload(self) -> bool:
        return _base.reload_getter(self._getter)


class Mapped:
    """Applies a key replacer before passing keys to the wrapped getter."""

    def __init__(self, replacer: keys.Replacer, getter: _base.Getter) -> None:
        self._replacer = replacer
        self._getter = getter

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        return self._getter.get(self._replacer(key))

    def reload(self) -> bool:
        return _base.reload_getter(self._getter)


class Alias:
    """
    A mapping from new keys to old (or alternate) keys.

    Aliases apply to leaves and to branches: an alias from ``new`` to
    ``old`` also resolves ``new.x.y`` as ``old.x.y``. An alias to the
    empty key maps the node onto the root.
    """

    def __init__(self, separator: str = constants.DEFAULT_SEPARATOR) -> None:
        self._lock = _threading.RLock()
        self._aliases: dict[str, list[str]] = {}
        self._separator = separator

    def append(self, new: str, old: str) -> None:
        """Add an alias tried after any existing aliases for new."""
        with self._lock:
            self._aliases.setdefault(new, []).append(old)

    def insert(self, new: str, old: str) -> None:
        """Add an alias tried before any existing aliases for new."""
        with self._lock:
            self._aliases.setdefault(new, []).insert(0, old)

    def get(self, getter: _base.Getter, key: str) -> tuple[_typing.Any, bool]:
        """Get key from getter, falling back to its aliases."""
        value, found = getter.get(key)
        if found:
            return value, True
        with self._lock:
            aliases = {k: list(v) for k, v in self._aliases.items()}
        for old in aliases.get(key, []):
            value, found = getter.get(old)
            if found:
                return value, True
        return self._get_branch(getter, key, aliases)

    def _get_branch(
        self,
        getter: _base.Getter,
        key: str,
        aliases: dict[str, list[str]],
    ) -> tuple[_typing.Any, bool]:
        sep = self._separator
        path = key.split(sep)
        # Longest node prefix first
        for length in range(len(path) - 1, -1, -1):
            node = sep.join(path[:length])
            if node not in aliases:
                continue
            start = len(node) + len(sep) if node else 0
            for old in aliases[node]:
                alias_key = (old + sep if old else "") + key[start:]
                value, found = getter.get(alias_key)
                if found:
                    return value, True
        return tree.NOT_FOUND


class RegexAlias:
    """
    Aliases whose new keys are regular expressions.

    The old key is a replacement template, e.g. an alias from
    ``r"^servers\\.(\\w+)\\.addr$"`` to ``r"hosts.\\1"``.
    """

    def __init__(self) -> None:
        self._lock = _threading.RLock()
        self._aliases: list[tuple[_re.Pattern[str], str]] = []

    def append(self, new: str, old: str) -> None:
        """
        Add an alias.

        Raises:
            re.error: If new is not a valid regular expression.
        """
        pattern = _re.compile(new)
        with self._lock:
            self._aliases.append((pattern, old))

    def get(self, getter: _base.Getter, key: str) -> tuple[_typing.Any, bool]:
        value, found = getter.get(key)
        if found:
            return value, True
        with self._lock:
            aliases = list(self._aliases)
        for pattern, old in aliases:
            if pattern.search(key):
                value, found = getter.get(pattern.sub(old, key))
                if found:
                    return value, True
        return tree.NOT_FOUND


class Aliased:
    """Decorates a getter with an Alias or RegexAlias fallback."""

    def __init__(self, getter: _base.Getter, alias: Alias | RegexAlias) -> None:
        self._getter = getter
        self._alias = alias

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        return self._alias.get(self._getter, key)

    def reload(self) -> bool:
        return _base.reload_getter(self._getter)
