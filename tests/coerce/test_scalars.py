"""Tests for the per-kind converters.

Each converter is checked for its accepted input types, its zero value
for None, and which error class its failures raise.
"""

import datetime as _datetime
import typing as _typing

import pytest as _pytest

import tierconf.coerce as coerce
import tierconf.errors as errors
import tierconf.kinds as kinds


class TestToBool:
    """Tests for to_bool."""

    @_pytest.mark.parametrize(
        ("value", "expected"),
        [(None, False), (True, True), (False, False), (0, False), (1, True), (-3, True), ("true", True), ("0", False)],
    )
    def test_valid(self, value: _typing.Any, expected: bool) -> None:
        """Bools, ints and bool literals convert."""
        assert coerce.to_bool(value) is expected

    @_pytest.mark.parametrize("value", [1.0, [True], {"a": 1}, b"true"])
    def test_type_error(self, value: _typing.Any) -> None:
        """Floats and containers are type errors."""
        with _pytest.raises(errors.ConversionTypeError):
            coerce.to_bool(value)

    def test_parse_error(self) -> None:
        """Non-literal strings are parse errors."""
        with _pytest.raises(errors.ConversionParseError):
            coerce.to_bool("yes")


class TestToInt:
    """Tests for to_int."""

    @_pytest.mark.parametrize(
        ("value", "expected"),
        [(None, 0), (True, 1), (42, 42), (-42, -42), (3.9, 3), (-3.9, -3), ("-17", -17), (kinds.MIN_INT64, kinds.MIN_INT64)],
    )
    def test_valid(self, value: _typing.Any, expected: int) -> None:
        """Numbers truncate toward zero and strings parse."""
        assert coerce.to_int(value) == expected

    @_pytest.mark.parametrize(
        "value",
        [kinds.MAX_INT64 + 1, kinds.MIN_INT64 - 1, "9223372036854775808", 1e19, float("inf"), float("nan")],
    )
    def test_overflow(self, value: _typing.Any) -> None:
        """Values outside int64 overflow."""
        with _pytest.raises(errors.ConversionOverflowError):
            coerce.to_int(value)

    def test_parse_error(self) -> None:
        """Float literals are not integers."""
        with _pytest.raises(errors.ConversionParseError):
            coerce.to_int("1.5")

    @_pytest.mark.parametrize("value", [[1], {"a": 1}, _datetime.timedelta(1)])
    def test_type_error(self, value: _typing.Any) -> None:
        """Containers and other types are type errors."""
        with _pytest.raises(errors.ConversionTypeError):
            coerce.to_int(value)

    def test_errors_subclass_builtins(self) -> None:
        """Generic handlers still catch conversion errors."""
        with _pytest.raises(OverflowError):
            coerce.to_int(kinds.MAX_INT64 + 1)
        with _pytest.raises(ValueError):
            coerce.to_int("x")
        with _pytest.raises(TypeError):
            coerce.to_int([])


class TestToUint:
    """Tests for to_uint."""

    @_pytest.mark.parametrize(
        ("value", "expected"),
        [(None, 0), (False, 0), (7, 7), (7.9, 7), ("42", 42), (kinds.MAX_UINT64, kinds.MAX_UINT64)],
    )
    def test_valid(self, value: _typing.Any, expected: int) -> None:
        """Non-negative numbers and digit strings convert."""
        assert coerce.to_uint(value) == expected

    @_pytest.mark.parametrize("value", [-1, -0.5, kinds.MAX_UINT64 + 1, "18446744073709551616"])
    def test_overflow(self, value: _typing.Any) -> None:
        """Negative and oversized numbers overflow."""
        with _pytest.raises(errors.ConversionOverflowError):
            coerce.to_uint(value)

    def test_negative_literal(self) -> None:
        """A signed literal is a parse error."""
        with _pytest.raises(errors.ConversionParseError):
            coerce.to_uint("-1")


class TestToFloat:
    """Tests for to_float."""

    @_pytest.mark.parametrize(
        ("value", "expected"),
        [(None, 0.0), (True, 1.0), (3, 3.0), (1.5, 1.5), ("2.5e2", 250.0)],
    )
    def test_valid(self, value: _typing.Any, expected: float) -> None:
        """Numbers and float literals convert."""
        assert coerce.to_float(value) == expected

    def test_huge_int(self) -> None:
        """Integers beyond float range overflow."""
        with _pytest.raises(errors.ConversionOverflowError):
            coerce.to_float(10**400)

    def test_type_error(self) -> None:
        """Containers are type errors."""
        with _pytest.raises(errors.ConversionTypeError):
            coerce.to_float([1.0])

    def test_float32_rounding(self) -> None:
        """Single precision rounding loses low bits."""
        assert coerce.to_float32(0.1) != 0.1
        assert coerce.to_float32(0.5) == 0.5


class TestToString:
    """Tests for to_string."""

    @_pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("abc", "abc"),
            (b"abc", "abc"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (1.5, "1.5"),
            (["a", "b"], "a,b"),
            (_datetime.date(2018, 3, 1), "2018-03-01"),
        ],
    )
    def test_valid(self, value: _typing.Any, expected: str) -> None:
        """Scalars render; string lists are joined with commas."""
        assert coerce.to_string(value) == expected

    @_pytest.mark.parametrize("value", [[1, 2], {"a": "b"}, ["a", 1]])
    def test_type_error(self, value: _typing.Any) -> None:
        """Non-string containers are type errors."""
        with _pytest.raises(errors.ConversionTypeError):
            coerce.to_string(value)

    def test_invalid_utf8(self) -> None:
        """Undecodable bytes are a parse error."""
        with _pytest.raises(errors.ConversionParseError):
            coerce.to_string(b"\xff")


class TestToSlice:
    """Tests for to_slice."""

    def test_list_passes_through(self) -> None:
        """Lists are returned as is."""
        value = [1, "a"]
        assert coerce.to_slice(value) is value

    def test_sequence_copied(self) -> None:
        """Other sequences become lists."""
        assert coerce.to_slice((1, 2)) == [1, 2]

    def test_string_wrapped(self) -> None:
        """A non-empty string is a single element list."""
        assert coerce.to_slice("a") == ["a"]

    @_pytest.mark.parametrize("value", [None, "", 1, {"a": 1}])
    def test_type_error(self, value: _typing.Any) -> None:
        """Missing values and scalars are not lists."""
        with _pytest.raises(errors.ConversionTypeError) as exc_info:
            coerce.to_slice(value)
        assert exc_info.value.kind is kinds.Kind.SLICE


class TestTypedSlices:
    """Tests for the element-typed slice converters."""

    def test_int_slice(self) -> None:
        """Elements convert with to_int."""
        assert coerce.to_int_slice(["1", 2, 3.5]) == [1, 2, 3]

    def test_uint_slice(self) -> None:
        """Elements convert with to_uint."""
        assert coerce.to_uint_slice(("1", 2)) == [1, 2]

    def test_float_slice(self) -> None:
        """Elements convert with to_float."""
        assert coerce.to_float_slice(["1.5", 2]) == [1.5, 2.0]

    def test_string_slice(self) -> None:
        """Elements convert with to_string."""
        assert coerce.to_string_slice([1, True, "x"]) == ["1", "true", "x"]

    def test_scalar_string_becomes_list(self) -> None:
        """A single value is a one element list."""
        assert coerce.to_int_slice("5") == [5]

    def test_first_bad_element_fails(self) -> None:
        """Element errors propagate with their own class."""
        with _pytest.raises(errors.ConversionOverflowError):
            coerce.to_uint_slice([1, -1, "x"])


class TestToDuration:
    """Tests for to_duration."""

    def test_literal(self) -> None:
        """Strings and bytes parse as duration literals."""
        assert coerce.to_duration("1h") == _datetime.timedelta(hours=1)
        assert coerce.to_duration(b"2s") == _datetime.timedelta(seconds=2)

    def test_timedelta_passes_through(self) -> None:
        """Decoded durations are kept."""
        delta = _datetime.timedelta(minutes=5)
        assert coerce.to_duration(delta) is delta

    @_pytest.mark.parametrize("value", [None, 5, 1.5])
    def test_type_error(self, value: _typing.Any) -> None:
        """Numbers are ambiguous and rejected."""
        with _pytest.raises(errors.ConversionTypeError):
            coerce.to_duration(value)


class TestToTime:
    """Tests for to_time."""

    def test_literal(self) -> None:
        """Strings parse as RFC 3339."""
        parsed = coerce.to_time("2018-03-01T00:00:00Z")
        assert parsed == _datetime.datetime(2018, 3, 1, tzinfo=_datetime.timezone.utc)

    def test_datetime_passes_through(self) -> None:
        """Decoded timestamps (e.g. from YAML or TOML) are kept."""
        stamp = _datetime.datetime(2020, 1, 1)
        assert coerce.to_time(stamp) is stamp

    def test_type_error(self) -> None:
        """Numbers are not timestamps."""
        with _pytest.raises(errors.ConversionTypeError):
            coerce.to_time(1234567890)
