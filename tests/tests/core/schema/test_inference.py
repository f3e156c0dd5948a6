#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Annotated, Any, Dict, List, NewType, Optional

import pytest

from jschema.core.schema.inference import infer, is_metadata_field, visible_name
from jschema.core.schema.introspect import describe
from jschema.core.schema.type_descriptor import FieldDef, StructType
from jschema.core.tags import Tags, tags


@dataclass
class Point:
    X: int
    Y: int


@dataclass
class Shape:
    Name: str
    Points: List[Point] = field(default_factory=list)
    Raw: bytes = b""
    Labels: Dict[str, str] = field(default_factory=dict)
    Anything: Dict[str, Any] = field(default_factory=dict)
    Parent: Optional[Point] = None


@dataclass
class Tree:
    Label: str
    Children: List[Tree] = field(default_factory=list)
    Next: Optional[Tree] = None


class Status(str, Enum):
    ACTIVE = "active"


class Priority(IntEnum):
    LOW = 1


class Shade(Enum):
    DARK = 1


Sku = NewType("Sku", str)


@dataclass
class Ticket:
    sku: Sku
    status: Status
    priority: Priority
    shade: Shade


def _struct(*fields: dict, name: str = "T") -> StructType:
    return StructType(name=name, fields=list(fields))


# --- Primitives --- #

@pytest.mark.parametrize("kind,expected", [
    ("bool", "bool"),
    ("int", "integer"),
    ("int8", "integer"),
    ("int16", "integer"),
    ("int32", "integer"),
    ("int64", "integer"),
    ("uint", "integer"),
    ("uint8", "integer"),
    ("uint16", "integer"),
    ("uint32", "integer"),
    ("uint64", "integer"),
    ("float32", "number"),
    ("float64", "number"),
    ("string", "string"),
])
def test_primitive_kinds_map_to_type_only(kind, expected):
    prop = infer(FieldDef(name="x", type=kind).type)
    assert prop.model_dump() == {"type": expected}
    assert prop.items is None
    assert prop.properties is None


@pytest.mark.parametrize("kind", ["any", "func", "chan", "invalid"])
def test_opaque_kinds_yield_empty_fragment(kind):
    assert infer(FieldDef(name="x", type=kind).type).model_dump() == {}


def test_pointer_is_transparent():
    t = FieldDef(name="x", type={"kind": "pointer", "elem": {"kind": "pointer", "elem": "float32"}}).type
    assert infer(t).model_dump() == {"type": "number"}


@pytest.mark.parametrize("name,expected", [
    ("sku", {"type": "string"}),
    ("status", {"type": "string"}),
    ("priority", {"type": "integer"}),
    ("shade", {}),
])
def test_named_primitive_types(name, expected):
    assert infer(describe(Ticket)).properties[name].model_dump() == expected


# --- Structs --- #

def test_name_and_age_end_to_end_shape():
    t = _struct(
        {"name": "Name", "type": "string"},
        {"name": "Age", "type": "int", "json": ",omitempty"},
    )
    assert infer(t).model_dump() == {
        "type": "object",
        "properties": {"Name": {"type": "string"}, "Age": {"type": "integer"}},
        "required": ["Name"],
    }
    assert infer(t).additional_properties is False


def test_required_excludes_omitempty_regardless_of_order():
    t = _struct(
        {"name": "Skip", "type": "string", "json": "-"},
        {"name": "B", "type": "string", "json": "b,omitempty"},
        {"name": "Meta", "type": "string", "jschema": "id"},
        {"name": "A", "type": "string"},
    )
    prop = infer(t)
    assert prop.required == ["A"]
    assert list(prop.properties) == ["b", "A"]


def test_required_follows_declaration_order():
    t = _struct(*[{"name": n, "type": "int"} for n in ["c", "a", "b"]])
    assert infer(t).required == ["c", "a", "b"]


def test_dash_name_is_omitted():
    prop = infer(_struct({"name": "Secret", "type": "string", "json": "-"}))
    assert prop.properties == {}
    assert prop.required == []


def test_dash_with_options_is_still_omitted():
    prop = infer(_struct({"name": "Secret", "type": "string", "json": "-,omitempty"}))
    assert "-" not in prop.properties


def test_metadata_fields_never_become_properties():
    t = _struct(
        {"name": "Id", "type": "string", "json": "id", "jschema": "id"},
        {"name": "Custom", "type": "string", "jschema": "whatever"},
        {"name": "Title", "type": "string"},
    )
    prop = infer(t)
    assert list(prop.properties) == ["Title"]
    assert prop.required == ["Title"]


def test_empty_jschema_name_with_options_is_data():
    t = _struct({"name": "Title", "type": "string", "jschema": ",omitempty"})
    assert infer(t).required == ["Title"]


def test_serialization_name_renames_property():
    prop = infer(_struct({"name": "UserName", "type": "string", "json": "user_name"}))
    assert prop.properties["user_name"].type == "string"
    assert prop.required == ["user_name"]


def test_empty_struct():
    prop = infer(_struct())
    assert prop.model_dump() == {"type": "object"}
    assert prop.properties == {}


def test_nested_struct_has_own_required():
    prop = infer(describe(Shape))
    parent = prop.properties["Parent"]
    assert parent.model_dump() == {
        "type": "object",
        "properties": {"X": {"type": "integer"}, "Y": {"type": "integer"}},
        "required": ["X", "Y"],
    }


# --- Sequences --- #

def test_byte_sequence_is_string():
    prop = infer(describe(Shape)).properties["Raw"]
    assert prop.model_dump() == {"type": "string"}
    assert prop.items is None


def test_primitive_sequence_items():
    prop = infer(describe(List[float]))
    assert prop.model_dump() == {"type": "array", "items": {"type": "number"}}


def test_struct_sequence_items_without_required():
    prop = infer(describe(Shape)).properties["Points"]
    assert prop.model_dump() == {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {"X": {"type": "integer"}, "Y": {"type": "integer"}},
        },
    }


def test_struct_sequence_items_use_serialization_names_only():
    elem = {
        "kind": "struct",
        "name": "E",
        "fields": [
            {"name": "A", "type": "string", "json": "a,omitempty"},
            {"name": "B", "type": "int"},
            {"name": "C", "type": "string", "json": "-"},
            {"name": "M", "type": "string", "jschema": "links-href"},
        ],
    }
    prop = infer(FieldDef(name="x", type={"kind": "slice", "elem": elem}).type)
    assert list(prop.items.properties) == ["a", "B", "-"]
    assert prop.model_dump()["items"]["properties"]["B"] == {"type": "integer"}


def test_sequence_of_sequences_has_array_items():
    prop = infer(describe(List[List[int]]))
    assert prop.model_dump() == {"type": "array", "items": {"type": "array"}}


@pytest.mark.parametrize("elem", [
    {"kind": "pointer", "elem": "string"},
    "any",
])
def test_sequence_of_unmapped_elements_has_no_items(elem):
    prop = infer(FieldDef(name="x", type={"kind": "slice", "elem": elem}).type)
    assert prop.model_dump() == {"type": "array"}


# --- Maps --- #

def test_map_of_primitive_uses_wildcard_key():
    prop = infer(describe(Shape)).properties["Labels"]
    assert prop.model_dump() == {"type": "object", "properties": {".*": {"type": "string"}}}
    assert prop.additional_properties is False


def test_map_of_unmapped_values_allows_additional_properties():
    prop = infer(describe(Shape)).properties["Anything"]
    assert prop.model_dump() == {"type": "object", "additionalProperties": True}


@pytest.mark.parametrize("value,expected", [
    ({"kind": "slice", "elem": "int"}, "array"),
    ({"kind": "map", "value": "int"}, "object"),
    ({"kind": "struct", "name": "S"}, "object"),
    ("uint16", "integer"),
])
def test_map_value_kinds(value, expected):
    prop = infer(FieldDef(name="x", type={"kind": "map", "value": value}).type)
    assert prop.properties[".*"].model_dump() == {"type": expected}


# --- Helpers --- #

def test_field_helpers():
    fd = FieldDef(name="Name", type="string", json=",omitempty")
    assert visible_name(fd) == "Name"
    assert not is_metadata_field(fd)
    assert is_metadata_field(FieldDef(name="Id", type="string", jschema="id"))


def test_dataclass_metadata_tags_drive_required():
    @dataclass
    class Local:
        a: str
        b: str = field(default="", metadata=tags(json="bee,omitempty"))
        c: Annotated[str, Tags(jschema="description")] = ""

    prop = infer(describe(Local))
    assert list(prop.properties) == ["a", "bee"]
    assert prop.required == ["a"]


# --- Cycles --- #

def test_recursive_type_is_cut():
    prop = infer(describe(Tree))
    nxt = prop.properties["Next"]
    assert nxt.model_dump() == {"type": "object", "additionalProperties": True}

    children = prop.properties["Children"]
    assert children.items.type == "object"
    assert children.items.properties == {}


def test_idempotent():
    first = infer(describe(Shape)).model_dump()
    second = infer(describe(Shape)).model_dump()
    assert first == second
