"""
Key replacers.

A replacer maps a key from one space to another, e.g. from environment
variable names (``APP_DB_HOST``) to config keys (``db.host``). Replacers
are plain callables and can be chained.
"""

from __future__ import annotations

import typing as _typing

import tierconf.constants as constants

Replacer: _typing.TypeAlias = _typing.Callable[[str], str]


def chain(*replacers: Replacer | None) -> Replacer:
    """Return a replacer applying each replacer in order, skipping None."""
    active = [r for r in replacers if r is not None]

    def replace(key: str) -> str:
        for replacer in active:
            key = replacer(key)
        return key

    return replace


def null_replacer() -> Replacer:
    """Return a replacer that leaves keys unchanged."""
    return lambda key: key


def string_replacer(old: str, new: str) -> Replacer:
    """Return a replacer substituting every occurrence of old with new."""
    return lambda key: key.replace(old, new)


def lower_case() -> Replacer:
    return str.lower


def upper_case() -> Replacer:
    return str.upper


def prefix_replacer(prefix: str) -> Replacer:
    """Return a replacer that relocates keys under a prefix."""
    return lambda key: prefix + key


def camel_case(separator: str = constants.DEFAULT_SEPARATOR) -> Replacer:
    """Return a replacer that CamelCases each tier: ``db.HOST`` -> ``Db.Host``."""

    def replace(key: str) -> str:
        if not key:
            return ""
        return separator.join(_capitalize(tier) for tier in key.split(separator))

    return replace


def lower_camel_case(separator: str = constants.DEFAULT_SEPARATOR) -> Replacer:
    """
    Return a replacer that lowerCamelCases a key.

    The first tier is lower-cased and the rest are capitalized:
    ``NESTED.KEY`` -> ``nested.Key``. Chain with string_replacer() to
    drop the separator entirely.
    """

    def replace(key: str) -> str:
        if not key:
            return ""
        tiers = key.split(separator)
        tiers[0] = tiers[0].lower()
        tiers[1:] = [_capitalize(tier) for tier in tiers[1:]]
        return separator.join(tiers)

    return replace


def lower_first(name: str) -> str:
    """
    Lower-case only the leading character of a name.

    This is the default mapping from struct field names to config keys:
    ``ConfigFile`` -> ``configFile``, ``max_tokens`` -> ``max_tokens``.
    """
    if not name:
        return name
    return name[0].lower() + name[1:]


def _capitalize(tier: str) -> str:
    if not tier:
        return tier
    return tier[0].upper() + tier[1:].lower()
