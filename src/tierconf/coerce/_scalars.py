"""
Per-kind conversions from loosely-typed config values.

Each converter accepts any value a decoder or source may produce and
either returns the converted value or raises a ConversionError:

- ConversionTypeError when the value's type can never convert;
- ConversionOverflowError when it converts in kind but not in range;
- ConversionParseError when a string is not a valid literal.

``None`` converts to the zero value of every scalar kind. Booleans are
always checked before integers, as ``bool`` is an ``int`` subclass.
"""

from __future__ import annotations

import collections.abc as _abc
import datetime as _datetime
import math as _math
import struct as _struct
import typing as _typing

import tierconf.coerce._literals as _literals
import tierconf.constants as constants
import tierconf.errors as errors
import tierconf.kinds as kinds

_BYTES_TYPES = (bytes, bytearray)


def _decode(value: bytes | bytearray, kind: kinds.Kind) -> str:
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as e:
        raise errors.ConversionParseError(value, kind, str(e)) from e


def to_bool(value: _typing.Any) -> bool:
    """
    Convert a value to a bool.

    Integers map to ``value != 0``; strings must be strict boolean
    literals. Floats are rejected.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return _literals.parse_bool(value)
    raise errors.ConversionTypeError(value, kinds.Kind.BOOL)


def _truncate(value: float, kind: kinds.Kind) -> int:
    if not _math.isfinite(value):
        raise errors.ConversionOverflowError(value, kind)
    return int(value)


def to_int(value: _typing.Any) -> int:
    """
    Convert a value to a signed 64-bit integer.

    Floats truncate toward zero. Values outside the signed 64-bit range
    raise ConversionOverflowError.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        result = _truncate(value, kinds.Kind.INT64)
    elif isinstance(value, str):
        result = _literals.parse_int(value)
    else:
        raise errors.ConversionTypeError(value, kinds.Kind.INT64)
    if kinds.Kind.INT64.overflows(result):
        raise errors.ConversionOverflowError(value, kinds.Kind.INT64)
    return result


def to_uint(value: _typing.Any) -> int:
    """
    Convert a value to an unsigned 64-bit integer.

    Negative numbers raise ConversionOverflowError rather than a parse or
    type error: the value is numeric, it just does not fit.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if value < 0:
            raise errors.ConversionOverflowError(value, kinds.Kind.UINT64)
        result = _truncate(value, kinds.Kind.UINT64)
    elif isinstance(value, str):
        result = _literals.parse_uint(value)
    else:
        raise errors.ConversionTypeError(value, kinds.Kind.UINT64)
    if kinds.Kind.UINT64.overflows(result):
        raise errors.ConversionOverflowError(value, kinds.Kind.UINT64)
    return result


def to_float(value: _typing.Any) -> float:
    """Convert a value to a 64-bit float."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError as e:
            raise errors.ConversionOverflowError(value, kinds.Kind.FLOAT64) from e
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return _literals.parse_float(value)
    raise errors.ConversionTypeError(value, kinds.Kind.FLOAT64)


def to_float32(value: float) -> float:
    """Round a float to the nearest single precision value."""
    return _struct.unpack("f", _struct.pack("f", value))[0]


def _is_string_slice(value: _typing.Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def to_string(value: _typing.Any) -> str:
    """
    Convert a value to a string.

    A list of strings is joined with commas. Sources that split values
    on a separator may have split a literal string that merely contained
    the separator; joining restores it for comma-separated sources.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, _BYTES_TYPES):
        return _decode(value, kinds.Kind.STRING)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (_datetime.datetime, _datetime.date)):
        return value.isoformat()
    if _is_string_slice(value):
        return constants.DEFAULT_LIST_JOINER.join(value)
    raise errors.ConversionTypeError(value, kinds.Kind.STRING)


def to_slice(value: _typing.Any) -> list[_typing.Any]:
    """
    Convert a value to a generic list.

    Lists pass through unchanged and other sequences are copied into a
    list. A non-empty string becomes a single element list, as some
    sources (e.g. environment variables) cannot tell a scalar from a one
    element list. ``None`` and ``""`` are rejected so "no value" stays
    distinct from "empty list".
    """
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        if value:
            return [value]
        raise errors.ConversionTypeError(value, kinds.Kind.SLICE)
    if isinstance(value, _abc.Sequence):
        return list(value)
    raise errors.ConversionTypeError(value, kinds.Kind.SLICE)


def to_duration(value: _typing.Any) -> _datetime.timedelta:
    """Convert a duration literal (string or bytes) to a timedelta."""
    if isinstance(value, _datetime.timedelta):
        return value
    if isinstance(value, _BYTES_TYPES):
        value = _decode(value, kinds.Kind.DURATION)
    if isinstance(value, str):
        return _literals.parse_duration(value)
    raise errors.ConversionTypeError(value, kinds.Kind.DURATION)


def to_time(value: _typing.Any) -> _datetime.datetime:
    """Convert an ISO-8601 timestamp (string or bytes) to a datetime."""
    if isinstance(value, _datetime.datetime):
        return value
    if isinstance(value, _BYTES_TYPES):
        value = _decode(value, kinds.Kind.TIME)
    if isinstance(value, str):
        return _literals.parse_time(value)
    raise errors.ConversionTypeError(value, kinds.Kind.TIME)


_T = _typing.TypeVar("_T")


def _map_slice(value: _typing.Any, convert: _typing.Callable[[_typing.Any], _T]) -> list[_T]:
    return [convert(item) for item in to_slice(value)]


def to_int_slice(value: _typing.Any) -> list[int]:
    """Convert a value to a list of signed 64-bit integers."""
    return _map_slice(value, to_int)


def to_uint_slice(value: _typing.Any) -> list[int]:
    """Convert a value to a list of unsigned 64-bit integers."""
    return _map_slice(value, to_uint)


def to_float_slice(value: _typing.Any) -> list[float]:
    """Convert a value to a list of 64-bit floats."""
    return _map_slice(value, to_float)


def to_string_slice(value: _typing.Any) -> list[str]:
    """Convert a value to a list of strings."""
    return _map_slice(value, to_string)
