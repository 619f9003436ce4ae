"""
Coercion target kinds.

A Kind describes the destination shape a loosely-typed config value is
converted into. Python has a single unbounded ``int``, so the fixed-width
integer and float kinds exist purely to drive range checks in the coercion
engine. They can be used directly or through the ``typing.Annotated`` aliases
defined here, e.g.::

    @dataclasses.dataclass
    class Server:
        port: kinds.Uint16 = 8080
        retries: kinds.Int8 = 3
"""

from __future__ import annotations

import dataclasses as _dataclasses
import datetime as _datetime
import enum as _enum
import types as _types
import typing as _typing

import pydantic as _pydantic


class Kind(_enum.Enum):
    """Destination shapes supported by the coercion engine."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    DURATION = "duration"
    TIME = "time"
    SLICE = "slice"
    STRUCT = "struct"
    ANY = "any"

    def __str__(self) -> str:
        return self.value

    @property
    def is_signed(self) -> bool:
        """True for the signed integer kinds."""
        return self in _SIGNED_BITS

    @property
    def is_unsigned(self) -> bool:
        """True for the unsigned integer kinds."""
        return self in _UNSIGNED_BITS

    @property
    def is_float(self) -> bool:
        """True for the floating point kinds."""
        return self in (Kind.FLOAT32, Kind.FLOAT64)

    @property
    def bits(self) -> int | None:
        """Bit width of a numeric kind, None for non-numeric kinds."""
        if self.is_signed:
            return _SIGNED_BITS[self]
        if self.is_unsigned:
            return _UNSIGNED_BITS[self]
        if self is Kind.FLOAT32:
            return 32
        if self is Kind.FLOAT64:
            return 64
        return None

    def overflows(self, value: int | float) -> bool:
        """
        Check whether a numeric value is out of range for this kind.

        Mirrors the usual fixed-width semantics: integers must fit the
        two's complement (signed) or plain binary (unsigned) range, and
        finite floats must not exceed the largest finite value of the
        width. Infinities and NaN never overflow a float kind.

        Args:
            value: The already converted 64-bit value.

        Returns:
            True if the value does not fit this kind.
        """
        if self.is_signed:
            bits = _SIGNED_BITS[self]
            return not -(1 << (bits - 1)) <= value <= (1 << (bits - 1)) - 1
        if self.is_unsigned:
            return not 0 <= value <= (1 << _UNSIGNED_BITS[self]) - 1
        if self is Kind.FLOAT32:
            magnitude = abs(value)
            return MAX_FLOAT32 < magnitude <= MAX_FLOAT64
        return False


_SIGNED_BITS = {Kind.INT8: 8, Kind.INT16: 16, Kind.INT32: 32, Kind.INT64: 64}
_UNSIGNED_BITS = {Kind.UINT8: 8, Kind.UINT16: 16, Kind.UINT32: 32, Kind.UINT64: 64}

MAX_INT64 = (1 << 63) - 1
MIN_INT64 = -(1 << 63)
MAX_UINT64 = (1 << 64) - 1
MAX_FLOAT32 = 3.4028234663852886e38
MAX_FLOAT64 = 1.7976931348623157e308

# Width aliases for annotating struct fields
Int8: _typing.TypeAlias = _typing.Annotated[int, Kind.INT8]
Int16: _typing.TypeAlias = _typing.Annotated[int, Kind.INT16]
Int32: _typing.TypeAlias = _typing.Annotated[int, Kind.INT32]
Int64: _typing.TypeAlias = _typing.Annotated[int, Kind.INT64]
Uint8: _typing.TypeAlias = _typing.Annotated[int, Kind.UINT8]
Uint16: _typing.TypeAlias = _typing.Annotated[int, Kind.UINT16]
Uint32: _typing.TypeAlias = _typing.Annotated[int, Kind.UINT32]
Uint64: _typing.TypeAlias = _typing.Annotated[int, Kind.UINT64]
Float32: _typing.TypeAlias = _typing.Annotated[float, Kind.FLOAT32]
Float64: _typing.TypeAlias = _typing.Annotated[float, Kind.FLOAT64]

_PLAIN_TYPES: dict[_typing.Any, Kind] = {
    bool: Kind.BOOL,
    int: Kind.INT64,
    float: Kind.FLOAT64,
    str: Kind.STRING,
    _datetime.timedelta: Kind.DURATION,
    _datetime.datetime: Kind.TIME,
    _typing.Any: Kind.ANY,
    object: Kind.ANY,
}


def is_struct_type(tp: _typing.Any) -> bool:
    """Check whether a type is a dataclass or pydantic model class."""
    if not isinstance(tp, type):
        return False
    if _dataclasses.is_dataclass(tp):
        return True
    return issubclass(tp, _pydantic.BaseModel)


def unwrap_optional(tp: _typing.Any) -> _typing.Any:
    """Strip ``None`` from an ``X | None`` annotation with a single other member."""
    origin = _typing.get_origin(tp)
    if origin is _typing.Union or origin is _types.UnionType:
        args = [a for a in _typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def target_kind(tp: _typing.Any) -> Kind | None:
    """
    Map a destination annotation to the Kind it converts into.

    Args:
        tp: A Kind, a plain Python type, an ``Annotated`` width alias,
            a ``list[T]``/``tuple[T, ...]`` generic, a struct class, or
            an ``X | None`` wrapper around any of those.

    Returns:
        The matching Kind, or None if the annotation is not supported.
    """
    if isinstance(tp, Kind):
        return tp
    tp = unwrap_optional(tp)
    origin = _typing.get_origin(tp)
    if origin is _typing.Annotated:
        for meta in tp.__metadata__:
            if isinstance(meta, Kind):
                return meta
        return target_kind(_typing.get_args(tp)[0])
    if origin in (list, tuple) or tp in (list, tuple):
        return Kind.SLICE
    if tp in _PLAIN_TYPES:
        return _PLAIN_TYPES[tp]
    if is_struct_type(tp):
        return Kind.STRUCT
    return None


def element_type(tp: _typing.Any) -> _typing.Any:
    """Return the element annotation of a slice annotation (``Any`` if bare)."""
    tp = unwrap_optional(tp)
    args = _typing.get_args(tp)
    if not args:
        return _typing.Any
    # list[T] and the homogeneous tuple[T, ...] both carry T first
    return args[0]
