"""
Strict parsers for string literals.

Python's own int()/float() are more forgiving than config literals should
be (they accept surrounding whitespace and digit separators), so every
literal is matched against an explicit grammar first. All failures raise
ConversionParseError.
"""

from __future__ import annotations

import datetime as _datetime
import math as _math
import re as _re

import tierconf.errors as errors
import tierconf.kinds as kinds

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_RE = _re.compile(r"[+-]?[0-9]+")
_UINT_RE = _re.compile(r"[0-9]+")
_FLOAT_RE = _re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    _re.IGNORECASE,
)

# Duration component: optional integer part, optional fraction, unit
_DURATION_PART_RE = _re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")

_TIME_RE = _re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt]([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]{1,9}))?(?:([Zz])|([+-])([0-9]{2}):([0-9]{2}))"
)

_NANOSECONDS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}


def parse_bool(text: str) -> bool:
    """Parse a boolean literal (``1 t T TRUE true True`` and the false forms)."""
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise errors.ConversionParseError(text, kinds.Kind.BOOL, "invalid syntax")


def parse_int(text: str) -> int:
    """
    Parse a base-10 signed integer literal.

    The result is not range checked; the caller decides whether it fits.
    """
    if not _INT_RE.fullmatch(text):
        raise errors.ConversionParseError(text, kinds.Kind.INT64, "invalid syntax")
    return int(text)


def parse_uint(text: str) -> int:
    """Parse a base-10 unsigned integer literal (no sign allowed)."""
    if not _UINT_RE.fullmatch(text):
        raise errors.ConversionParseError(text, kinds.Kind.UINT64, "invalid syntax")
    return int(text)


def parse_float(text: str) -> float:
    """
    Parse a decimal float literal.

    A finite literal too large for a float64 is an overflow, not a parse
    error, since the text itself is well formed.
    """
    if not _FLOAT_RE.fullmatch(text):
        raise errors.ConversionParseError(text, kinds.Kind.FLOAT64, "invalid syntax")
    value = float(text)
    if _math.isinf(value) and "inf" not in text.lower():
        raise errors.ConversionOverflowError(text, kinds.Kind.FLOAT64)
    return value


def parse_duration(text: str) -> _datetime.timedelta:
    """
    Parse a duration literal such as ``300ms``, ``-1.5h`` or ``2h45m``.

    A duration is an optionally signed sequence of decimal numbers, each
    with an optional fraction and a mandatory unit suffix. Valid units are
    ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``. A bare
    ``0`` needs no unit.

    Sub-microsecond precision is truncated, as timedelta cannot hold it.

    Args:
        text: The literal to parse.

    Returns:
        The parsed duration.

    Raises:
        ConversionParseError: On syntax errors, unknown or missing units,
            or totals beyond the signed 64-bit nanosecond range.
    """
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return _datetime.timedelta(0)
    if not rest:
        raise errors.ConversionParseError(text, kinds.Kind.DURATION, "invalid duration")

    total = 0
    pos = 0
    while pos < len(rest):
        match = _DURATION_PART_RE.match(rest, pos)
        if match is None or match.end() == pos:
            raise errors.ConversionParseError(text, kinds.Kind.DURATION, "invalid duration")
        whole, fraction, unit = match.groups()
        if not whole and not fraction:
            raise errors.ConversionParseError(text, kinds.Kind.DURATION, "invalid duration")
        if not unit:
            raise errors.ConversionParseError(
                text, kinds.Kind.DURATION, "missing unit in duration"
            )
        scale = _NANOSECONDS_PER_UNIT.get(unit)
        if scale is None:
            raise errors.ConversionParseError(
                text, kinds.Kind.DURATION, f"unknown unit {unit!r} in duration"
            )
        total += int(whole or "0") * scale
        if fraction:
            total += int(fraction) * scale // 10 ** len(fraction)
        pos = match.end()

    limit = -kinds.MIN_INT64 if negative else kinds.MAX_INT64
    if total > limit:
        raise errors.ConversionParseError(text, kinds.Kind.DURATION, "invalid duration")
    microseconds = total // 1_000
    return _datetime.timedelta(microseconds=-microseconds if negative else microseconds)


def parse_time(text: str) -> _datetime.datetime:
    """
    Parse an RFC 3339 timestamp, e.g. ``2018-03-01T12:30:00Z``.

    A full date, a full time and a UTC offset (``Z`` or ``+hh:mm``) are
    required. Fractional seconds beyond microseconds are truncated.
    """
    match = _TIME_RE.fullmatch(text)
    if match is None:
        raise errors.ConversionParseError(text, kinds.Kind.TIME, "not an RFC 3339 timestamp")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    if zulu:
        tz = _datetime.timezone.utc
    else:
        if int(off_h) > 23 or int(off_m) > 59:
            raise errors.ConversionParseError(text, kinds.Kind.TIME, "offset out of range")
        offset = _datetime.timedelta(hours=int(off_h), minutes=int(off_m))
        tz = _datetime.timezone(-offset if sign == "-" else offset)
    microsecond = int((fraction or "").ljust(6, "0")[:6])
    try:
        return _datetime.datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=tz,
        )
    except ValueError as e:
        raise errors.ConversionParseError(text, kinds.Kind.TIME, str(e)) from e
