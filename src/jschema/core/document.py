#!/usr/bin/env python3
"""
Purpose:
    Document assembler: the top-level entry point that turns a value into a
    JSON-Schema `Document`.

    Steps, in order:
        1) default `$schema` and `links`
        2) infer the root property from the value's type descriptor
        3) harvest id and description
        4) harvest links

    No step raises for any input shape; missing annotations simply leave the
    corresponding metadata empty.
"""

from __future__ import annotations

from typing import Any, Optional

from jschema.core.constants import DEFAULT_JSON_INDENT, DEFAULT_SCHEMA
from jschema.core.schema.harvest import HarvestOptions, MetadataHarvester
from jschema.core.schema.inference import InferenceEngine
from jschema.core.schema.introspect import describe_value
from jschema.core.schema.nodes import Document
from jschema.core.schema.type_descriptor import TypeDescriptor


# --- Public API --- #

def build_document(
    value: Any,
    *,
    descriptor: Optional[TypeDescriptor] = None,
    options: Optional[HarvestOptions] = None,
    document: Optional[Document] = None,
) -> Document:
    """
    Build the schema document for `value`.

    Args:
        value:
            The root value. Its type drives inference; its contents drive the
            metadata harvest.
        descriptor:
            Explicit type descriptor. Defaults to the descriptor of `type(value)`,
            which is required when `value` is a plain mapping loaded from data.
        options:
            Harvest behavior switches; defaults to the faithful behaviors.
        document:
            Existing document to fill; a preset `schema_uri` is kept.

    Returns:
        Document: freshly assembled (or the filled `document`).
    """
    doc = document if document is not None else Document()
    _set_defaults(doc)

    t = descriptor if descriptor is not None else describe_value(value)
    InferenceEngine().infer(t, target=doc)

    harvester = MetadataHarvester(options)
    doc.id = harvester.read_id(t, value) or doc.id
    doc.description = harvester.read_description(t, value) or doc.description
    doc.links.extend(harvester.read_links(t, value))
    return doc


def generate(
    value: Any,
    *,
    descriptor: Optional[TypeDescriptor] = None,
    options: Optional[HarvestOptions] = None,
    indent: Optional[int] = DEFAULT_JSON_INDENT,
) -> str:
    """Build the document for `value` and return its JSON text."""
    return build_document(value, descriptor=descriptor, options=options).to_json(indent=indent)


# --- Internals --- #

def _set_defaults(doc: Document) -> None:
    if not doc.schema_uri:
        doc.schema_uri = DEFAULT_SCHEMA
    if doc.links is None:
        doc.links = []
