"""Tests for coercion target kinds."""

import dataclasses as _dataclasses
import datetime as _datetime
import typing as _typing

import pydantic as _pydantic
import pytest as _pytest

import tierconf.kinds as kinds


@_dataclasses.dataclass
class Point:
    x: int = 0


class Model(_pydantic.BaseModel):
    x: int = 0


class TestKindProperties:
    """Tests for Kind classification."""

    def test_bits(self) -> None:
        """Numeric kinds report their width."""
        assert kinds.Kind.INT8.bits == 8
        assert kinds.Kind.UINT32.bits == 32
        assert kinds.Kind.FLOAT32.bits == 32
        assert kinds.Kind.STRING.bits is None

    def test_classification(self) -> None:
        """Kinds are signed, unsigned or float."""
        assert kinds.Kind.INT64.is_signed
        assert kinds.Kind.UINT8.is_unsigned
        assert kinds.Kind.FLOAT64.is_float
        assert not kinds.Kind.BOOL.is_signed

    def test_str(self) -> None:
        """Kinds render as their name."""
        assert str(kinds.Kind.UINT16) == "uint16"


class TestOverflows:
    """Tests for Kind.overflows."""

    @_pytest.mark.parametrize(
        ("kind", "value", "expected"),
        [
            (kinds.Kind.INT8, 127, False),
            (kinds.Kind.INT8, 128, True),
            (kinds.Kind.INT8, -129, True),
            (kinds.Kind.UINT8, 255, False),
            (kinds.Kind.UINT8, -1, True),
            (kinds.Kind.INT64, kinds.MAX_INT64, False),
            (kinds.Kind.INT64, kinds.MAX_INT64 + 1, True),
            (kinds.Kind.UINT64, kinds.MAX_UINT64 + 1, True),
            (kinds.Kind.FLOAT32, 3.4e38, False),
            (kinds.Kind.FLOAT32, 3.5e38, True),
            (kinds.Kind.FLOAT32, float("inf"), False),
            (kinds.Kind.FLOAT64, 1e308, False),
            (kinds.Kind.STRING, 10**30, False),
        ],
    )
    def test_overflows(self, kind: kinds.Kind, value: float, expected: bool) -> None:
        """Values outside the width overflow."""
        assert kind.overflows(value) is expected


class TestTargetKind:
    """Tests for mapping annotations to kinds."""

    @_pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (bool, kinds.Kind.BOOL),
            (int, kinds.Kind.INT64),
            (float, kinds.Kind.FLOAT64),
            (str, kinds.Kind.STRING),
            (_datetime.timedelta, kinds.Kind.DURATION),
            (_datetime.datetime, kinds.Kind.TIME),
            (_typing.Any, kinds.Kind.ANY),
            (kinds.Uint8, kinds.Kind.UINT8),
            (kinds.Float32, kinds.Kind.FLOAT32),
            (kinds.Int16 | None, kinds.Kind.INT16),
            (list[int], kinds.Kind.SLICE),
            (tuple[str, ...], kinds.Kind.SLICE),
            (list, kinds.Kind.SLICE),
            (Point, kinds.Kind.STRUCT),
            (Model, kinds.Kind.STRUCT),
            (Point | None, kinds.Kind.STRUCT),
            (kinds.Kind.UINT32, kinds.Kind.UINT32),
            (_typing.Annotated[str, "doc"], kinds.Kind.STRING),
        ],
    )
    def test_supported(self, annotation: _typing.Any, expected: kinds.Kind) -> None:
        """Supported annotations map to their kind."""
        assert kinds.target_kind(annotation) is expected

    @_pytest.mark.parametrize("annotation", [set, dict, bytes, int | str])
    def test_unsupported(self, annotation: _typing.Any) -> None:
        """Other annotations are unsupported."""
        assert kinds.target_kind(annotation) is None

    def test_element_type(self) -> None:
        """Slice annotations expose their element type."""
        assert kinds.element_type(list[kinds.Uint8]) == kinds.Uint8
        assert kinds.element_type(tuple[int, ...]) is int
        assert kinds.element_type(list) is _typing.Any
        assert kinds.element_type(list[int] | None) is int

    def test_is_struct_type(self) -> None:
        """Dataclass and pydantic classes are structs, instances are not."""
        assert kinds.is_struct_type(Point)
        assert kinds.is_struct_type(Model)
        assert not kinds.is_struct_type(Point())
        assert not kinds.is_struct_type(dict)
