#!/usr/bin/env python3
"""
Purpose:
    Defines the annotation vocabulary understood by jschema and the parser for
    the comma-separated `name,opt1,opt2` tag grammar shared by the `json` and
    `jschema` namespaces.

    Tags are attached to fields at declaration time, either through
    `typing.Annotated[T, Tags(...)]` or through dataclass field metadata built
    with `tags(...)`, and are parsed once into an `Annotation`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_serializer

from jschema.core import constants as C


# --- Vocabulary --- #

class MetaTag(str, Enum):
    """
    Keywords recognized in the `jschema` namespace.

    Any non-empty `jschema` name marks a field as structural metadata; the
    members below are the ones the metadata harvester acts upon.
    """

    ID = C.TAG_ID
    DESCRIPTION = C.TAG_DESCRIPTION
    LINKS = C.TAG_LINKS
    LINKS_TITLE = C.TAG_LINKS_TITLE
    LINKS_DESCRIPTION = C.TAG_LINKS_DESCRIPTION
    LINKS_METHOD = C.TAG_LINKS_METHOD
    LINKS_HREF = C.TAG_LINKS_HREF
    LINKS_REL = C.TAG_LINKS_REL
    LINKS_SCHEMA_PROPERTIES = C.TAG_LINKS_SCHEMA_PROPERTIES
    LINKS_SCHEMA_TYPE = C.TAG_LINKS_SCHEMA_TYPE
    SCHEMA = C.TAG_BASE
    BASE = C.TAG_BASE_ALIAS

    @classmethod
    def try_parse(cls, value: str | MetaTag | None) -> MetaTag | None:
        """
        Exact lookup of a tag name; unknown or empty names return `None`.

        Tag names are case-sensitive and are not trimmed, matching how the
        serialization grammar compares them.
        """
        if isinstance(value, MetaTag):
            return value
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    def is_link_attribute(self) -> bool:
        """True for the per-link attribute keywords (`links-title` .. `links-rel`)."""
        return self in LINK_ATTRIBUTES

    def is_links_container(self) -> bool:
        """True for keywords the links harvest descends into."""
        return self in {MetaTag.SCHEMA, MetaTag.LINKS}


# Link attribute keyword -> Link field name
LINK_ATTRIBUTES: Dict[MetaTag, str] = {
    MetaTag.LINKS_TITLE: "title",
    MetaTag.LINKS_DESCRIPTION: "description",
    MetaTag.LINKS_METHOD: "method",
    MetaTag.LINKS_HREF: "href",
    MetaTag.LINKS_REL: "rel",
}


# --- Parser --- #

def parse_tag(tag: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Split a tag into its name and its option tokens.

    Examples
    --------
    >>> parse_tag("name,omitempty,string")
    ('name', ('omitempty', 'string'))
    >>> parse_tag("")
    ('', ())
    """
    name, sep, rest = (tag or "").partition(",")
    return name, (tuple(rest.split(",")) if sep and rest else ())


class Annotation(BaseModel):
    """
    Parsed view of one tag: a primary `name` plus its option tokens.

    Accepts either a raw tag string or a mapping when validated as a field of
    another model (see `TagAnnotation`).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ""
    options: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, tag: str | None) -> Annotation:
        name, options = parse_tag(tag or "")
        return cls(name=name, options=options)

    def contains(self, option_name: str) -> bool:
        """Membership test on the option tokens (e.g. `omitempty`)."""
        return option_name in self.options

    @property
    def omitempty(self) -> bool:
        return self.contains(C.OPT_OMITEMPTY)

    @property
    def meta(self) -> MetaTag | None:
        """The vocabulary keyword named by this annotation, if any."""
        return MetaTag.try_parse(self.name)

    def __str__(self) -> str:
        return ",".join((self.name, *self.options)) if self.options else self.name

    @model_serializer(mode="plain")
    def _dump_raw(self) -> str:
        """Dump back to the raw tag string."""
        return str(self)


def _coerce_annotation(v: Any) -> Any:
    """Raw tag strings (and `None`) become parsed `Annotation` instances."""
    if v is None:
        return Annotation()
    if isinstance(v, str):
        return Annotation.parse(v)
    return v


TagAnnotation = Annotated[Annotation, BeforeValidator(_coerce_annotation)]


# --- Declaration-time markers --- #

@dataclass(frozen=True)
class Tags:
    """
    Field marker carrying raw tags, used inside `typing.Annotated`.

    Example
    -------
    >>> from typing import Annotated
    >>> class Person:
    ...     name: Annotated[str, Tags(json="name")]
    ...     age: Annotated[int, Tags(json="age,omitempty")]
    """

    json: Optional[str] = None
    jschema: Optional[str] = None

    def annotations(self) -> Tuple[Annotation, Annotation]:
        """Return the parsed (`json`, `jschema`) annotations."""
        return Annotation.parse(self.json), Annotation.parse(self.jschema)


def tags(*, json: Optional[str] = None, jschema: Optional[str] = None) -> Dict[str, Any]:
    """
    Build dataclass field metadata carrying tags.

    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Person:
    ...     age: int = field(default=0, metadata=tags(json="age,omitempty"))
    """
    return {C.JSON_TAG: json, C.TAG: jschema}


def tags_from_metadata(metadata: Mapping[str, Any]) -> Tags | None:
    """Recover `Tags` from dataclass field metadata (None if no tag keys)."""
    if not metadata or (C.JSON_TAG not in metadata and C.TAG not in metadata):
        return None
    return Tags(json=metadata.get(C.JSON_TAG), jschema=metadata.get(C.TAG))
