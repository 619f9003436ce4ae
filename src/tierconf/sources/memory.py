"""In-memory configuration source."""

from __future__ import annotations

import threading as _threading
import typing as _typing

import tierconf.constants as constants
import tierconf.tree as tree


class DictSource:
    """
    Getter over an in-memory tree.

    The tree may be nested (resolved with the separator, like a decoded
    file) or flat with full keys set via set(). Flat keys are matched
    first, so ``set("db.host", ...)`` shadows a nested ``db: {host: ...}``.

    Example:
        >>> src = DictSource({"db": {"port": 5432}})
        >>> src.set("db.host", "localhost")
        >>> src.get("db.port"), src.get("db.host")
        ((5432, True), ('localhost', True))
    """

    def __init__(
        self,
        data: _typing.Mapping[_typing.Any, _typing.Any] | None = None,
        *,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> None:
        self._lock = _threading.Lock()
        self._separator = separator
        self._tree: dict[str, _typing.Any] = tree.normalize(data) if data else {}

    def set(self, key: str, value: _typing.Any) -> None:
        """Set a value for a full key. Later gets see the new value."""
        with self._lock:
            updated = dict(self._tree)
            updated[key] = value
            # Swap, so readers never see a tree mid-update
            self._tree = updated

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        return tree.resolve(self._tree, key, self._separator)
