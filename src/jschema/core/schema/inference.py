#!/usr/bin/env python3
"""
Purpose:
    Property inference engine: turns a type descriptor into a schema
    `Property` by a recursive walk over its structure.

    One function per descriptor variant, combined through `InferenceEngine.infer`:

    - primitive : `type` from the kind table
    - pointer   : transparent, recurse into the element
    - sequence  : byte elements become `string`; otherwise `array` with `items`
    - map       : wildcard `.*` property, or `additionalProperties` when the
                  value kind has no mapped type
    - struct    : `object` with one property per data field; fields without
                  `omitempty` are listed in `required` in declaration order
    - opaque    : empty fragment

    Fields whose `jschema` tag has a name are document metadata and never
    become properties.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from jschema.core import constants as C
from jschema.core.schema.kind import Kind, json_type_for
from jschema.core.schema.nodes import Item, Property
from jschema.core.schema.type_descriptor import (
    FieldDef,
    MapType,
    OpaqueType,
    PointerType,
    PrimitiveType,
    SequenceType,
    StructType,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)


# --- Public API --- #

def infer(descriptor: TypeDescriptor) -> Property:
    """Return the schema property describing `descriptor`."""
    return InferenceEngine().infer(descriptor)


def is_metadata_field(field: FieldDef) -> bool:
    """True if the field carries a `jschema` name (structural metadata, not data)."""
    return field.schema_tag.name != ""


def visible_name(field: FieldDef) -> str:
    """The externally visible name: the `json` tag name, else the declared name."""
    return field.json_tag.name or field.name


# --- Engine --- #

class InferenceEngine:
    """
    Recursive walker. Holds the stack of structs currently being expanded so
    a self-referencing type is cut instead of recursing without bound.
    """

    def __init__(self) -> None:
        self._expanding: List[int] = []
        self._dispatch: Dict[type, Callable[[Property, TypeDescriptor], None]] = {
            PrimitiveType: self._read_primitive,
            PointerType: self._read_pointer,
            SequenceType: self._read_sequence,
            MapType: self._read_map,
            StructType: self._read_struct,
            OpaqueType: self._read_opaque,
        }

    def infer(self, descriptor: TypeDescriptor, target: Optional[Property] = None) -> Property:
        """
        Fill `target` (a fresh Property when omitted) from `descriptor`.
        Returns the filled property.
        """
        prop = target if target is not None else Property()
        self._read(prop, descriptor)
        return prop

    def _read(self, prop: Property, t: TypeDescriptor) -> None:
        js_type = json_type_for(t.kind_enum)
        if js_type:
            prop.type = js_type
        self._dispatch[type(t)](prop, t)

    # --- Variants --- #

    def _read_primitive(self, prop: Property, t: PrimitiveType) -> None:
        pass

    def _read_opaque(self, prop: Property, t: OpaqueType) -> None:
        logger.debug("No schema type for kind %r", t.kind)

    def _read_pointer(self, prop: Property, t: PointerType) -> None:
        self._read(prop, t.elem)

    def _read_sequence(self, prop: Property, t: SequenceType) -> None:
        elem = t.elem
        elem_kind = elem.kind_enum
        if elem_kind.is_byte():
            prop.type = "string"
            return

        if isinstance(elem, StructType):
            prop.items = self._item_from_struct(elem)
            return

        js_type = json_type_for(elem_kind)
        if js_type:
            prop.items = Item(type=js_type)

    def _read_map(self, prop: Property, t: MapType) -> None:
        js_type = json_type_for(t.value.kind_enum)
        if js_type:
            prop.properties = {C.WILDCARD_KEY: Property(type=js_type)}
        else:
            prop.additional_properties = True

    def _read_struct(self, prop: Property, t: StructType) -> None:
        prop.type = "object"
        prop.properties = {}
        prop.additional_properties = False

        if self._cut_cycle(prop, t):
            return

        self._expanding.append(id(t))
        try:
            for field in t.fields:
                if is_metadata_field(field):
                    logger.debug("Skipping metadata field %s.%s", t.name, field.name)
                    continue

                name = field.json_tag.name
                if name == C.OMIT_NAME:
                    continue
                name = name or field.name

                prop.properties[name] = self.infer(field.type)
                if not field.json_tag.contains(C.OPT_OMITEMPTY):
                    prop.required.append(name)
        finally:
            self._expanding.pop()

    # --- Helpers --- #

    def _item_from_struct(self, t: StructType) -> Item:
        """
        Element schema for a sequence of structs. Item fields use only the
        visible name; no `-` filtering and no `required` list.
        """
        item = Item(type="object", properties={})
        if id(t) in self._expanding:
            logger.warning("Recursive type %r in sequence element; not expanded", t.name)
            return item

        self._expanding.append(id(t))
        try:
            for field in t.fields:
                if is_metadata_field(field):
                    continue
                item.properties[visible_name(field)] = self.infer(field.type)
        finally:
            self._expanding.pop()
        return item

    def _cut_cycle(self, prop: Property, t: StructType) -> bool:
        """Leave a recursive occurrence as an unconstrained object."""
        if id(t) not in self._expanding:
            return False
        logger.warning("Recursive type %r; emitting an unconstrained object", t.name)
        prop.properties = None
        prop.additional_properties = True
        return True
