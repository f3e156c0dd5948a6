#!/usr/bin/env python3
"""
Core constants used across jschema.

- Document defaults: the `$schema` URI and the root schema type.
- Tag vocabulary: annotation namespaces, metadata keywords, and options.
- File handling: supported descriptor extensions and default text encoding.
"""

from typing import Final

# --- Document defaults --- #

# Value emitted as `$schema` when the caller leaves it unset
DEFAULT_SCHEMA: Final[str] = "http://json-schema.org/schema#"

# Indentation used by the output formatter unless configured otherwise
DEFAULT_JSON_INDENT: Final[int] = 2


# --- Tag namespaces --- #

# Schema-specific annotation namespace (structural metadata)
TAG: Final[str] = "jschema"

# General serialization annotation namespace (visible name + options)
JSON_TAG: Final[str] = "json"


# --- Tag keywords --- #

TAG_BASE: Final[str] = "schema"
TAG_BASE_ALIAS: Final[str] = "base"
TAG_ID: Final[str] = "id"
TAG_DESCRIPTION: Final[str] = "description"
TAG_LINKS: Final[str] = "links"
TAG_LINKS_TITLE: Final[str] = "links-title"
TAG_LINKS_DESCRIPTION: Final[str] = "links-description"
TAG_LINKS_METHOD: Final[str] = "links-method"
TAG_LINKS_HREF: Final[str] = "links-href"
TAG_LINKS_REL: Final[str] = "links-rel"
TAG_LINKS_SCHEMA_PROPERTIES: Final[str] = "links-schema-properties"
TAG_LINKS_SCHEMA_TYPE: Final[str] = "links-schema-type"

# Option shared by both namespaces
OPT_OMITEMPTY: Final[str] = "omitempty"

# Serialization name meaning "leave this field out of the schema"
OMIT_NAME: Final[str] = "-"

# Property key expressing "any map key maps to this value type"
WILDCARD_KEY: Final[str] = ".*"


# --- File handling --- #

# Supported type descriptor file extensions
SUPPORTED_DESCRIPTOR_EXT: Final[frozenset[str]] = frozenset({".json", ".yaml", ".yml"})

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"
