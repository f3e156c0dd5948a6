#!/usr/bin/env python3
"""
Purpose:
    Metadata harvester: reads document-level metadata (id, description and
    hypermedia links) from a value, guided by the `jschema` tags of its type
    descriptor. Runs independently of property inference.

Notes:
    Two behaviors are configurable through `HarvestOptions`:

    metadata_source
        "container" (default): id/description are the string form of the
        value being scanned, not of the tagged field.
        "field": they are the string form of the tagged field's value.
    link_merge
        "last-write-wins" (default): one Link per link sequence; each tagged
        attribute keeps the last value seen across all elements.
        "per-element": one Link per element.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from jschema.core.schema.nodes import Link
from jschema.core.schema.type_descriptor import (
    FieldDef,
    PointerType,
    SequenceType,
    StructType,
    TypeDescriptor,
)
from jschema.core.tags import LINK_ATTRIBUTES, MetaTag

logger = logging.getLogger(__name__)

LinkMerge = Literal["last-write-wins", "per-element"]
MetadataSource = Literal["container", "field"]


class HarvestOptions(BaseModel):
    """Harvest behavior switches (see module notes)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    link_merge: LinkMerge = "last-write-wins"
    metadata_source: MetadataSource = "container"


# --- Value access --- #

def field_value(value: Any, field: FieldDef) -> Any:
    """Read a declared field from an object (attribute) or a mapping (key)."""
    if isinstance(value, Mapping):
        return value.get(field.name)
    return getattr(value, field.name, None)


def string_of(value: Any) -> str:
    """String form used for harvested attributes; `None` is empty."""
    return "" if value is None else str(value)


# --- Harvester --- #

class MetadataHarvester:
    """Collects id, description and links from one root value."""

    def __init__(self, options: Optional[HarvestOptions] = None) -> None:
        self.options = options or HarvestOptions()

    # --- Id / description --- #

    def read_id(self, t: TypeDescriptor, value: Any) -> str:
        """Return the harvested document id ("" when no field qualifies)."""
        return self._read_tagged(t, value, MetaTag.ID)

    def read_description(self, t: TypeDescriptor, value: Any) -> str:
        """Return the harvested document description ("" when no field qualifies)."""
        return self._read_tagged(t, value, MetaTag.DESCRIPTION)

    def _read_tagged(self, t: TypeDescriptor, value: Any, keyword: MetaTag) -> str:
        """
        Shallow scan of the top-level struct for fields tagged `keyword`
        without `omitempty`. The last qualifying field wins.
        """
        if not isinstance(t, StructType) or value is None:
            return ""

        found = ""
        for field in t.fields:
            tag = field.schema_tag
            if tag.meta is not keyword or tag.omitempty:
                continue
            if self.options.metadata_source == "field":
                found = string_of(field_value(value, field))
            else:
                found = string_of(value)
        return found

    # --- Links --- #

    def read_links(self, t: TypeDescriptor, value: Any) -> List[Link]:
        """Return the links found under `value`, in discovery order."""
        links: List[Link] = []
        self._links(t, value, links)
        return links

    def _links(self, t: TypeDescriptor, value: Any, out: List[Link]) -> None:
        if value is None:
            return
        if isinstance(t, PointerType):
            self._links(t.elem, value, out)
        elif isinstance(t, StructType):
            self._links_from_struct(t, value, out)
        elif isinstance(t, SequenceType):
            self._links_from_sequence(t, value, out)

    def _links_from_struct(self, t: StructType, value: Any, out: List[Link]) -> None:
        for field in t.fields:
            if isinstance(field.type, PointerType):
                self._links(field.type, field_value(value, field), out)
                continue
            meta = field.schema_tag.meta
            if meta is not None and meta.is_links_container():
                self._links(field.type, field_value(value, field), out)

    def _links_from_sequence(self, t: SequenceType, value: Any, out: List[Link]) -> None:
        elem = t.elem
        while isinstance(elem, PointerType):
            elem = elem.elem
        if not isinstance(elem, StructType):
            logger.debug("Link sequence of non-struct elements ignored")
            return
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return

        per_element = self.options.link_merge == "per-element"
        link = Link()
        for element in value:
            if element is None:
                continue
            if per_element:
                link = Link()
            self._apply_link_fields(elem, element, link)
            if per_element and not link.is_empty():
                out.append(link)

        if not per_element and not link.is_empty():
            out.append(link)

    @staticmethod
    def _apply_link_fields(t: StructType, element: Any, link: Link) -> None:
        """Overwrite link attributes from the element's tagged fields."""
        for field in t.fields:
            meta = field.schema_tag.meta
            if meta is None or not meta.is_link_attribute():
                continue
            setattr(link, LINK_ATTRIBUTES[meta], string_of(field_value(element, field)))
