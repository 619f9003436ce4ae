"""
Field descriptor tables for struct population.

A struct is a dataclass or a pydantic model. Each struct type gets a
table, built once and cached, describing how every public field maps to
a config key and whether it holds a nested struct (or a list of them).
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import functools as _functools
import typing as _typing

import pydantic as _pydantic

import tierconf.constants as constants
import tierconf.errors as errors
import tierconf.keys as keys
import tierconf.kinds as kinds


@_dataclasses.dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """How one struct field is populated from config."""

    name: str
    """Attribute name on the struct."""

    key: str
    """Config key, from the tag override or the derived field name."""

    annotation: _typing.Any
    """Declared type, used as the conversion target for leaves."""

    struct_type: type | None = None
    """Set when the field holds a nested struct."""

    element_struct_type: type | None = None
    """Set when the field holds a list of structs."""


def check_destination(obj: _typing.Any) -> None:
    """
    Verify that obj is a struct instance that can be populated in place.

    Raises:
        InvalidStructError: For classes, non-struct objects and frozen
            structs.
    """
    if isinstance(obj, type) or not kinds.is_struct_type(type(obj)):
        raise errors.InvalidStructError(obj)
    if _dataclasses.is_dataclass(obj):
        if obj.__dataclass_params__.frozen:  # type: ignore[attr-defined]
            raise errors.InvalidStructError(obj, "frozen dataclass")
    elif obj.model_config.get("frozen"):
        raise errors.InvalidStructError(obj, "frozen model")


def new_instance(cls: type) -> _typing.Any:
    """
    Create an empty struct instance to populate.

    Pydantic models are built with model_construct() so required fields
    need not be present yet. Dataclasses must be constructible without
    arguments.
    """
    if issubclass(cls, _pydantic.BaseModel):
        return cls.model_construct()
    try:
        return cls()
    except TypeError as e:
        raise errors.InvalidStructError(cls, "cannot be created without arguments") from e


def _type_hints(cls: type) -> dict[str, _typing.Any]:
    try:
        return _typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to raw annotations
        return {}


def _tag_override(extra: _typing.Any, tag: str) -> str | None:
    if isinstance(extra, _abc.Mapping):
        value = extra.get(tag)
        if isinstance(value, str) and value:
            return value
    return None


def _declared_fields(cls: type, tag: str) -> list[tuple[str, str | None, _typing.Any]]:
    hints = _type_hints(cls)
    if _dataclasses.is_dataclass(cls):
        return [
            (f.name, _tag_override(f.metadata, tag), hints.get(f.name, f.type))
            for f in _dataclasses.fields(cls)
        ]
    declared = []
    for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
        override = _tag_override(info.json_schema_extra, tag) or info.alias
        declared.append((name, override, hints.get(name, info.annotation)))
    return declared


@_functools.lru_cache(maxsize=None)
def field_table(cls: type, tag: str = constants.DEFAULT_TAG) -> tuple[FieldDescriptor, ...]:
    """
    Build the field descriptor table for a struct type.

    Fields are listed in declaration order. Private fields (leading
    underscore) are skipped. The config key is the field's ``tag``
    override if present, otherwise the field name with its leading
    character lower-cased.

    Args:
        cls: A dataclass or pydantic model class.
        tag: Metadata key holding key overrides. For dataclasses this is
            looked up in ``field(metadata=...)``; for pydantic models in
            ``Field(json_schema_extra=...)``, falling back to the alias.

    Returns:
        Tuple of FieldDescriptor, one per populatable field.
    """
    if not kinds.is_struct_type(cls):
        raise errors.InvalidStructError(cls)

    table: list[FieldDescriptor] = []
    for name, override, annotation in _declared_fields(cls, tag):
        if name.startswith("_"):
            continue
        inner = kinds.unwrap_optional(annotation)
        struct_type = inner if kinds.is_struct_type(inner) else None
        element_struct_type = None
        if struct_type is None and kinds.target_kind(inner) is kinds.Kind.SLICE:
            element = kinds.unwrap_optional(kinds.element_type(inner))
            if kinds.is_struct_type(element):
                element_struct_type = element
        table.append(
            FieldDescriptor(
                name=name,
                key=override or keys.lower_first(name),
                annotation=annotation,
                struct_type=struct_type,
                element_struct_type=element_struct_type,
            )
        )
    return tuple(table)
