"""
Exception taxonomy for tierconf.

Not-found is deliberately absent from the coercion layer: the tree resolver
and getters report missing keys through a ``(value, found)`` tuple. Only the
Config facade turns a missing key into ``NotFoundError``.

Coercion errors are split so callers can tell the failure modes apart:

- ConversionTypeError: the value's kind can never convert to the target.
- ConversionOverflowError: the value converts in kind but not in range.
- ConversionParseError: a string failed to parse as the target literal.

Each also subclasses the matching builtin (TypeError, OverflowError,
ValueError) so generic handlers keep working.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

if _typing.TYPE_CHECKING:
    import tierconf.kinds as kinds


class ConfigError(Exception):
    """Base class for all tierconf errors."""


class ConversionError(ConfigError):
    """Base class for errors raised by the coercion engine."""

    def __init__(self, value: _typing.Any, kind: kinds.Kind, message: str) -> None:
        self.value = value
        self.kind = kind
        super().__init__(message)


class ConversionTypeError(ConversionError, TypeError):
    """The value's type is fundamentally incompatible with the target kind."""

    def __init__(self, value: _typing.Any, kind: kinds.Kind) -> None:
        super().__init__(
            value,
            kind,
            f"cannot convert {value!r} ({type(value).__name__}) to {kind}",
        )


class ConversionOverflowError(ConversionError, OverflowError):
    """The value converts in kind but does not fit the target's range."""

    def __init__(self, value: _typing.Any, kind: kinds.Kind) -> None:
        super().__init__(value, kind, f"overflow converting {value!r} to {kind}")


class ConversionParseError(ConversionError, ValueError):
    """A string value could not be parsed as a literal of the target kind."""

    def __init__(self, value: _typing.Any, kind: kinds.Kind, reason: str = "") -> None:
        self.reason = reason
        message = f"cannot parse {value!r} as {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(value, kind, message)


class UnsupportedTargetError(ConfigError, TypeError):
    """
    A destination type has no converter.

    This is a usage error rather than a conversion failure, so it is not
    a ConversionError. Struct population still records it against the
    field and carries on with the remaining fields.
    """

    def __init__(self, target: _typing.Any) -> None:
        self.target = target
        super().__init__(f"unsupported conversion target: {target!r}")


class InvalidArgumentError(ConfigError, TypeError):
    """Struct population was called with an unusable argument."""


class InvalidStructError(InvalidArgumentError):
    """Struct population was given something other than a struct instance."""

    def __init__(self, obj: _typing.Any, reason: str = "") -> None:
        self.obj = obj
        name = obj.__name__ if isinstance(obj, type) else type(obj).__name__
        message = (
            "unmarshal destination must be a dataclass or pydantic model "
            f"instance, got {name}"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NotFoundError(ConfigError, KeyError):
    """A key could not be found in any getter."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"key {self.key!r} not found"


class UnmarshalError(ConfigError):
    """
    A field failed to convert while unmarshalling from a Config.

    The original conversion error is kept as ``error`` (and as the
    exception's ``__cause__``) so callers can still tell an overflow
    from a type or parse failure.
    """

    def __init__(self, key: str, error: Exception) -> None:
        self.key = key
        self.error = error
        super().__init__(f"cannot unmarshal {key}: {error}")


class ConfigFileError(ConfigError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path | str, message: str) -> None:
        self.path = _pathlib.Path(path)
        super().__init__(f"Error in config file {path}: {message}")


class UnsupportedFormatError(ConfigFileError):
    """No decoder is registered for the file's format."""


class DecodeError(ConfigError):
    """A decoder could not parse its input."""

    def __init__(self, format_name: str, message: str) -> None:
        self.format_name = format_name
        super().__init__(f"invalid {format_name}: {message}")
