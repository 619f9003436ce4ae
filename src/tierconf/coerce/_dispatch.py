"""
Generic conversion dispatch and struct population.

convert_to() routes a value to the converter for a destination type and
enforces the destination's width. unmarshal_struct() populates a struct
instance from a string-keyed mapping, field by field.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import typing as _typing

import tierconf.coerce._scalars as _scalars
import tierconf.coerce._structs as _structs
import tierconf.constants as constants
import tierconf.errors as errors
import tierconf.kinds as kinds

_logger = _logging.getLogger(__name__)


def _is_optional(target: _typing.Any) -> bool:
    return not isinstance(target, kinds.Kind) and kinds.unwrap_optional(target) is not target


def convert_to(
    value: _typing.Any,
    target: _typing.Any,
    *,
    tag: str = constants.DEFAULT_TAG,
) -> _typing.Any:
    """
    Convert a value to a destination type.

    Integer and float destinations are range checked against their width
    after conversion, so ``convert_to(257, kinds.Uint8)`` and
    ``convert_to("257", kinds.Uint8)`` both raise ConversionOverflowError.
    Slices convert element-wise and fail on the first bad element. Struct
    destinations are created and populated with unmarshal_struct().
    ``Any`` passes the value through untouched.

    Args:
        value: Raw value, as returned by a getter.
        target: A Kind or a type annotation understood by
            ``kinds.target_kind()``.
        tag: Field metadata key for struct key overrides.

    Returns:
        The converted value. ``None`` converts to ``None`` for an
        ``X | None`` target.

    Raises:
        ConversionTypeError, ConversionOverflowError, ConversionParseError:
            If the value cannot be converted.
        InvalidStructError: If a struct destination cannot be created.
        UnsupportedTargetError: If the target is not a supported
            destination. It is a TypeError but not a ConversionError.
    """
    kind = kinds.target_kind(target)
    if kind is None:
        raise errors.UnsupportedTargetError(target)
    if value is None and _is_optional(target):
        return None

    if kind is kinds.Kind.ANY:
        return value
    if kind is kinds.Kind.BOOL:
        return _scalars.to_bool(value)
    if kind.is_signed:
        result = _scalars.to_int(value)
        if kind.overflows(result):
            raise errors.ConversionOverflowError(value, kind)
        return result
    if kind.is_unsigned:
        result = _scalars.to_uint(value)
        if kind.overflows(result):
            raise errors.ConversionOverflowError(value, kind)
        return result
    if kind.is_float:
        converted = _scalars.to_float(value)
        if kind.overflows(converted):
            raise errors.ConversionOverflowError(value, kind)
        if kind is kinds.Kind.FLOAT32:
            return _scalars.to_float32(converted)
        return converted
    if kind is kinds.Kind.STRING:
        return _scalars.to_string(value)
    if kind is kinds.Kind.DURATION:
        return _scalars.to_duration(value)
    if kind is kinds.Kind.TIME:
        return _scalars.to_time(value)
    if kind is kinds.Kind.SLICE:
        return _convert_slice(value, target, tag)
    return _convert_struct(value, target, tag)


def _convert_slice(value: _typing.Any, target: _typing.Any, tag: str) -> _typing.Any:
    if isinstance(target, kinds.Kind):
        return _scalars.to_slice(value)
    element = kinds.element_type(target)
    items = [convert_to(item, element, tag=tag) for item in _scalars.to_slice(value)]
    container = kinds.unwrap_optional(target)
    if container is tuple or _typing.get_origin(container) is tuple:
        return tuple(items)
    return items


def _convert_struct(value: _typing.Any, target: _typing.Any, tag: str) -> _typing.Any:
    if isinstance(target, kinds.Kind):
        raise errors.UnsupportedTargetError(target)
    if not isinstance(value, _abc.Mapping):
        raise errors.ConversionTypeError(value, kinds.Kind.STRUCT)
    obj = _structs.new_instance(kinds.unwrap_optional(target))
    unmarshal_struct(value, obj, tag=tag)
    return obj


def unmarshal_struct(
    source: _abc.Mapping[str, _typing.Any],
    obj: _typing.Any,
    *,
    tag: str = constants.DEFAULT_TAG,
) -> None:
    """
    Populate a struct instance from a string-keyed mapping.

    Fields are visited in declaration order. A field whose key is absent
    from the source keeps its current value. Nested struct fields recurse
    into the existing nested instance (one is created if the attribute is
    None) and require a mapping source value.

    Every field is attempted even when some fail, so as much of the
    struct as possible is populated. The first error encountered is
    raised once all fields have been processed, unchanged, so callers
    can still tell a type error from an overflow or parse error.

    Args:
        source: Mapping of config keys to raw values.
        obj: Dataclass or pydantic model instance, modified in place.
        tag: Field metadata key for key overrides.

    Raises:
        InvalidArgumentError: If source is not a mapping.
        InvalidStructError: If obj is not a mutable struct instance.
        ConversionError: The first field conversion failure.
    """
    _structs.check_destination(obj)
    if not isinstance(source, _abc.Mapping):
        raise errors.InvalidArgumentError(
            f"unmarshal source must be a mapping, got {type(source).__name__}"
        )

    first_error: errors.ConfigError | None = None
    for field in _structs.field_table(type(obj), tag):
        if field.key not in source:
            continue
        raw = source[field.key]
        try:
            if field.struct_type is not None:
                _unmarshal_nested(raw, obj, field, tag)
            else:
                setattr(obj, field.name, convert_to(raw, field.annotation, tag=tag))
        except errors.ConfigError as e:
            _logger.debug("Cannot populate field %r from key %r: %s", field.name, field.key, e)
            if first_error is None:
                first_error = e
    if first_error is not None:
        raise first_error


def _unmarshal_nested(
    raw: _typing.Any,
    obj: _typing.Any,
    field: _structs.FieldDescriptor,
    tag: str,
) -> None:
    if raw is None and _is_optional(field.annotation):
        setattr(obj, field.name, None)
        return
    if not isinstance(raw, _abc.Mapping):
        raise errors.ConversionTypeError(raw, kinds.Kind.STRUCT)
    nested = getattr(obj, field.name, None)
    if not isinstance(nested, field.struct_type):  # type: ignore[arg-type]
        nested = _structs.new_instance(field.struct_type)  # type: ignore[arg-type]
        setattr(obj, field.name, nested)
    unmarshal_struct(raw, nested, tag=tag)
