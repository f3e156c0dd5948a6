#!/usr/bin/env python3
"""
Purpose:
    Defines the Kind enumeration describing the structural category of a type,
    the frozen mapping from kinds to JSON-Schema `type` strings, and the
    best-effort mapping from plain Python types to kinds.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, get_origin


class Kind(str, Enum):
    """
    Structural category of a type.

    - bool, int*/uint*, float* and string : primitives
    - pointer : optional/indirection, transparent to the schema
    - slice   : homogeneous sequence
    - map     : associative map
    - struct  : record with named fields
    - any, func, chan : kinds with no schema counterpart
    - invalid : unrecognized (returned by `parse`)
    """

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    POINTER = "pointer"
    SLICE = "slice"
    MAP = "map"
    STRUCT = "struct"
    ANY = "any"
    FUNC = "func"
    CHAN = "chan"
    INVALID = "invalid"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | Kind | None) -> Kind:
        """
        Coerce arbitrary input to a `Kind`; strings are trimmed and lowercased.
        `None` or unknown strings -> `Kind.INVALID`.

        >>> Kind.parse(" Int64 ")
        <Kind.INT64: 'int64'>
        """
        if isinstance(value, Kind):
            return value
        if value is None:
            return cls.INVALID
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INVALID

    @classmethod
    def from_python_type(cls, t: Any) -> Kind:
        """
        Mapping from a Python type object to a primitive `Kind`.

        Subclasses take the kind of their builtin base (`IntEnum` -> int,
        `class Color(str, Enum)` -> string). `bool` is checked before `int`.
        Non-classes and everything else -> `Kind.INVALID`.
        """
        if not isinstance(t, type) or get_origin(t) is not None:
            return cls.INVALID
        if issubclass(t, bool):
            return cls.BOOL
        if issubclass(t, int):
            return cls.INT
        if issubclass(t, float):
            return cls.FLOAT64
        if issubclass(t, str):
            return cls.STRING
        return cls.INVALID

    # --- Introspection helpers --- #

    def is_primitive(self) -> bool:
        """True for bool, the integer and float families, and string."""
        return self in PRIMITIVE_KINDS

    def is_integer(self) -> bool:
        return self in INTEGER_KINDS

    def is_float(self) -> bool:
        return self in {Kind.FLOAT32, Kind.FLOAT64}

    def is_byte(self) -> bool:
        """True for the single-byte element kind (binary data)."""
        return self is Kind.UINT8


INTEGER_KINDS: frozenset[Kind] = frozenset({
    Kind.INT, Kind.INT8, Kind.INT16, Kind.INT32, Kind.INT64,
    Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64,
})

PRIMITIVE_KINDS: frozenset[Kind] = INTEGER_KINDS | {Kind.BOOL, Kind.FLOAT32, Kind.FLOAT64, Kind.STRING}

OPAQUE_KINDS: frozenset[Kind] = frozenset({Kind.ANY, Kind.FUNC, Kind.CHAN, Kind.INVALID})


# --- Kind -> JSON-Schema type --- #

_KIND_TO_JSON_TYPE = {
    Kind.BOOL: "bool",
    **{k: "integer" for k in INTEGER_KINDS},
    Kind.FLOAT32: "number",
    Kind.FLOAT64: "number",
    Kind.STRING: "string",
    Kind.SLICE: "array",
    Kind.STRUCT: "object",
    Kind.MAP: "object",
}

KIND_TO_JSON_TYPE: Mapping[Kind, str] = MappingProxyType(_KIND_TO_JSON_TYPE)


def json_type_for(kind: Kind) -> str:
    """Return the JSON-Schema type for `kind`, or "" when it has none."""
    return KIND_TO_JSON_TYPE.get(kind, "")
