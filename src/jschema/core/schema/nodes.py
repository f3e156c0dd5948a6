#!/usr/bin/env python3
"""
Purpose:
    Output tree of a generated schema: Document, Property, Item and Link.
    Each node dumps to its JSON shape (`model_dump()`), applying the field
    presence rules of the output format; `Document.to_json()` is the output
    formatter.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_serializer

from jschema.core.constants import DEFAULT_JSON_INDENT


class Item(BaseModel):
    """Element schema of an array-typed property (no nested items)."""

    type: str = ""
    properties: Optional[Dict[str, Property]] = None

    @model_serializer(mode="plain")
    def _dump_flat(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.type:
            out["type"] = self.type
        if self.properties:
            out["properties"] = {k: p.model_dump() for k, p in self.properties.items()}
        return out


class Property(BaseModel):
    """
    A schema node.

    Presence rules: `type`, `items`, `properties` and `required` are emitted
    only when non-empty; `additionalProperties` only when true.
    """

    type: str = ""
    items: Optional[Item] = None
    properties: Optional[Dict[str, Property]] = None
    required: List[str] = Field(default_factory=list)
    additional_properties: bool = False

    def _dump_property(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.type:
            out["type"] = self.type
        if self.items is not None and (dumped := self.items.model_dump()):
            out["items"] = dumped
        if self.properties:
            out["properties"] = {k: p.model_dump() for k, p in self.properties.items()}
        if self.required:
            out["required"] = list(self.required)
        if self.additional_properties:
            out["additionalProperties"] = True
        return out

    @model_serializer(mode="plain")
    def _dump_flat(self) -> Dict[str, Any]:
        return self._dump_property()


class Link(BaseModel):
    """One hypermedia affordance; all attributes optional."""

    title: str = ""
    description: str = ""
    method: str = ""
    href: str = ""
    rel: str = ""

    def is_empty(self) -> bool:
        """True when the link would serialize to `{}`."""
        return not self.model_dump()

    @model_serializer(mode="plain")
    def _dump_flat(self) -> Dict[str, Any]:
        fields = ("title", "description", "method", "href", "rel")
        return {k: getattr(self, k) for k in fields if getattr(self, k)}


class Document(Property):
    """
    Root of a generated schema: document-level metadata plus the embedded
    root property, whose keys are flattened into the document.
    """

    schema_uri: str = ""
    id: str = ""
    description: str = ""
    links: Optional[List[Link]] = None

    @model_serializer(mode="plain")
    def _dump_flat(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.schema_uri:
            out["$schema"] = self.schema_uri
        if self.id:
            out["id"] = self.id
        if self.description:
            out["description"] = self.description
        if self.links:
            out["links"] = [link.model_dump() for link in self.links]
        out.update(self._dump_property())
        return out

    def read(self, value: Any, *, descriptor: Any = None, options: Any = None) -> Document:
        """
        Fill this document from `value` (see `jschema.core.document.build_document`).
        A preset `schema_uri` is kept; returns `self`.
        """
        from jschema.core.document import build_document
        return build_document(value, descriptor=descriptor, options=options, document=self)

    # --- Output formatting --- #

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def to_json(self, indent: Optional[int] = DEFAULT_JSON_INDENT) -> str:
        """Return the indented JSON encoding of the document."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __str__(self) -> str:
        return self.to_json()


Item.model_rebuild()
Property.model_rebuild()
