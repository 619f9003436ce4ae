"""
Environment variable source.

Variables are read once, at construction. The prefix is stripped, the
remaining name is mapped into config space with a replacer (by default
``_`` becomes the tier separator and the name is lower-cased), and values
containing the list separator are split into lists:

    MYAPP_DB_HOSTS=alpha:beta  ->  db.hosts = ["alpha", "beta"]
"""

from __future__ import annotations

import logging as _logging
import os as _os
import typing as _typing

import tierconf.constants as constants
import tierconf.keys as keys
import tierconf.settings as settings_mod
import tierconf.tree as tree

_logger = _logging.getLogger(__name__)


def split_list(value: str, separator: str) -> str | list[str]:
    """Split a value on the separator, leaving separator-free values scalar."""
    if separator and separator in value:
        return value.split(separator)
    return value


class EnvSource:
    """Getter over environment variables sharing a prefix."""

    def __init__(
        self,
        prefix: str | None = None,
        *,
        replacer: keys.Replacer | None = None,
        list_separator: str | None = None,
        environ: _typing.Mapping[str, str] | None = None,
        settings: settings_mod.Settings | None = None,
    ) -> None:
        """
        Initialize the source and snapshot the environment.

        Args:
            prefix: Prefix identifying variables of interest, including
                any trailing separator (e.g. ``"MYAPP_"``). Defaults to
                ``settings.env_prefix``.
            replacer: Maps a variable name (prefix removed) to a config
                key. Defaults to ``_`` -> separator, then lower case.
            list_separator: Separator splitting list values. Defaults to
                ``settings.env_list_separator``.
            environ: Mapping to read instead of os.environ (for testing).
            settings: Library settings providing defaults.
        """
        settings = settings or settings_mod.Settings()
        self._prefix = settings.env_prefix if prefix is None else prefix
        self._replacer = replacer or keys.chain(
            keys.string_replacer("_", settings.separator),
            keys.lower_case(),
        )
        self._list_separator = (
            settings.env_list_separator if list_separator is None else list_separator
        )
        self._config = self._load(_os.environ if environ is None else environ)

    def _load(self, environ: _typing.Mapping[str, str]) -> dict[str, _typing.Any]:
        config: dict[str, _typing.Any] = {}
        for name, value in environ.items():
            if not name.startswith(self._prefix):
                continue
            key = self._replacer(name[len(self._prefix) :])
            if key:
                config[key] = split_list(value, self._list_separator)
        _logger.debug("Loaded %d environment variables with prefix %r", len(config), self._prefix)
        return config

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        # Keys are flat, so no tier splitting; array suffixes still apply
        return tree.resolve(self._config, key, "")
