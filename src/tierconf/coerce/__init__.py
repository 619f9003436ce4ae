"""
Type coercion engine.

Converts loosely-typed config values (strings, numbers, bools, bytes,
lists) into the types an application asks for, with range checking, and
populates dataclass or pydantic instances from string-keyed mappings.

Example:
    >>> import tierconf.coerce as coerce
    >>> import tierconf.kinds as kinds
    >>> coerce.to_int("42")
    42
    >>> coerce.convert_to("8080", kinds.Uint16)
    8080
"""

from tierconf.coerce._dispatch import convert_to, unmarshal_struct
from tierconf.coerce._scalars import (
    to_bool,
    to_duration,
    to_float,
    to_float32,
    to_float_slice,
    to_int,
    to_int_slice,
    to_slice,
    to_string,
    to_string_slice,
    to_time,
    to_uint,
    to_uint_slice,
)
from tierconf.coerce._structs import (
    FieldDescriptor,
    check_destination,
    field_table,
    new_instance,
)

__all__ = [
    "FieldDescriptor",
    "check_destination",
    "convert_to",
    "field_table",
    "new_instance",
    "to_bool",
    "to_duration",
    "to_float",
    "to_float32",
    "to_float_slice",
    "to_int",
    "to_int_slice",
    "to_slice",
    "to_string",
    "to_string_slice",
    "to_time",
    "to_uint",
    "to_uint_slice",
    "unmarshal_struct",
]
