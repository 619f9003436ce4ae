"""
Values returned by Config.get().

A Value wraps the raw value of a leaf and offers typed accessors backed
by the coercion engine. Without an error handler, a failed conversion
raises. With one, the handler receives the error and the accessor returns
the zero value of its type, which suits applications that prefer to run
on defaults and log problems.
"""

from __future__ import annotations

import datetime as _datetime
import typing as _typing

import tierconf.coerce as coerce
import tierconf.errors as errors

ErrorHandler: _typing.TypeAlias = _typing.Callable[[Exception], "Exception | None"]

_T = _typing.TypeVar("_T")


class Value:
    """A raw config value with typed accessors."""

    __slots__ = ("_value", "_error_handler")

    def __init__(self, value: _typing.Any, error_handler: ErrorHandler | None = None) -> None:
        self._value = value
        self._error_handler = error_handler

    def __repr__(self) -> str:
        return f"Value({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    @property
    def raw(self) -> _typing.Any:
        """The value exactly as returned by the getter."""
        return self._value

    def _convert(self, convert: _typing.Callable[[_typing.Any], _T], zero: _T) -> _T:
        try:
            return convert(self._value)
        except errors.ConversionError as e:
            if self._error_handler is None:
                raise
            self._error_handler(e)
            return zero

    def as_bool(self) -> bool:
        return self._convert(coerce.to_bool, False)

    def as_int(self) -> int:
        """Convert to a signed 64-bit integer."""
        return self._convert(coerce.to_int, 0)

    def as_uint(self) -> int:
        """Convert to an unsigned 64-bit integer."""
        return self._convert(coerce.to_uint, 0)

    def as_float(self) -> float:
        return self._convert(coerce.to_float, 0.0)

    def as_string(self) -> str:
        return self._convert(coerce.to_string, "")

    def as_duration(self) -> _datetime.timedelta:
        return self._convert(coerce.to_duration, _datetime.timedelta(0))

    def as_time(self) -> _datetime.datetime:
        return self._convert(coerce.to_time, _datetime.datetime.min)

    def as_slice(self) -> list[_typing.Any]:
        return self._convert(coerce.to_slice, [])

    def as_int_slice(self) -> list[int]:
        return self._convert(coerce.to_int_slice, [])

    def as_uint_slice(self) -> list[int]:
        return self._convert(coerce.to_uint_slice, [])

    def as_float_slice(self) -> list[float]:
        return self._convert(coerce.to_float_slice, [])

    def as_string_slice(self) -> list[str]:
        return self._convert(coerce.to_string_slice, [])

    def as_type(self, target: _typing.Any) -> _typing.Any:
        """
        Convert to an arbitrary destination type via coerce.convert_to().

        Returns None on failure when an error handler is set.
        """
        return self._convert(lambda v: coerce.convert_to(v, target), None)
