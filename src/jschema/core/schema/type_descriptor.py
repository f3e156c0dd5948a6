#!/usr/bin/env python3
"""
Purpose:
    Defines the closed set of type descriptors the inference engine walks:
    primitive, pointer, sequence, map, struct and opaque. Descriptors are
    Pydantic models discriminated on `kind`, so they can be built from Python
    types (see `introspect`) or authored declaratively in JSON/YAML files.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Annotated, Any, List, Literal, Union

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from jschema.core.constants import DEFAULT_TEXT_ENCODING, SUPPORTED_DESCRIPTOR_EXT
from jschema.core.schema.kind import Kind, OPAQUE_KINDS, PRIMITIVE_KINDS
from jschema.core.tags import Annotation, TagAnnotation


PrimitiveKind = Literal[
    "bool",
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64",
    "float32", "float64",
    "string",
]

OpaqueKind = Literal["any", "func", "chan", "invalid"]


# --- Variants --- #

class PrimitiveType(BaseModel):
    """bool, the integer and float families, or string."""
    model_config = ConfigDict(extra="forbid")
    kind: PrimitiveKind

    @property
    def kind_enum(self) -> Kind:
        return Kind(self.kind)


class PointerType(BaseModel):
    """One level of indirection; invisible to the generated schema."""
    model_config = ConfigDict(extra="forbid")
    kind: Literal["pointer"] = "pointer"
    elem: DescriptorField

    @property
    def kind_enum(self) -> Kind:
        return Kind.POINTER


class SequenceType(BaseModel):
    """Homogeneous sequence; a `uint8` element means binary data."""
    model_config = ConfigDict(extra="forbid")
    kind: Literal["slice"] = "slice"
    elem: DescriptorField

    @property
    def kind_enum(self) -> Kind:
        return Kind.SLICE


class MapType(BaseModel):
    """Associative map from `key` to `value`."""
    model_config = ConfigDict(extra="forbid")
    kind: Literal["map"] = "map"
    key: DescriptorField = Field(default_factory=lambda: PrimitiveType(kind="string"))
    value: DescriptorField

    @property
    def kind_enum(self) -> Kind:
        return Kind.MAP


class OpaqueType(BaseModel):
    """A kind with no schema counterpart (produces an empty fragment)."""
    model_config = ConfigDict(extra="forbid")
    kind: OpaqueKind = "any"

    @property
    def kind_enum(self) -> Kind:
        return Kind(self.kind)


class FieldDef(BaseModel):
    """
    One declared field of a struct.

    `json` and `jschema` carry the two tag namespaces; both accept raw
    `name,opt1,opt2` strings.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., description="Declared field name.")
    type: DescriptorField = Field(..., description="Type descriptor of the field.")
    json_tag: TagAnnotation = Field(default_factory=Annotation, alias="json")
    schema_tag: TagAnnotation = Field(default_factory=Annotation, alias="jschema")

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, v: Any) -> str:
        s = "" if v is None else str(v).strip()
        if not s:
            raise ValueError("The field 'name' is not set")
        return s


class StructType(BaseModel):
    """
    Record with named fields, in declaration order.

    `fields` may be appended to after construction; the introspector does
    this to close self-referencing types.
    """

    model_config = ConfigDict(extra="forbid")
    kind: Literal["struct"] = "struct"
    name: str = Field(default="", description="Type name (informational, used by registries).")
    fields: List[FieldDef] = Field(default_factory=list)

    @property
    def kind_enum(self) -> Kind:
        return Kind.STRUCT

    @model_validator(mode="after")
    def _check_no_duplicates(self) -> StructType:
        counts = Counter(f.name for f in self.fields)
        dups = sorted(n for n, c in counts.items() if c > 1)
        if dups:
            raise ValueError(f"Duplicate field names in struct {self.name!r}: {', '.join(dups)}")
        return self

    # --- File IO --- #

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> StructType:
        """
        Load a struct descriptor from a JSON or YAML file.

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the extension is unsupported or the payload is not a mapping
            ValidationError: if the payload fails model validation
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"The file {str(p)!r} does not exist")
        suffix = p.suffix.lower()
        if suffix not in SUPPORTED_DESCRIPTOR_EXT:
            raise ValueError(
                f"Invalid descriptor file extension for {p.name!r}; "
                f"expected one of {sorted(SUPPORTED_DESCRIPTOR_EXT)}"
            )
        text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
        try:
            data = json.loads(text) if suffix == ".json" else yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Unreadable descriptor file {p.name!r}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Descriptor file {p.name!r} must contain a mapping")
        data.setdefault("name", p.stem)
        return cls.model_validate(data)


TypeDescriptor = Annotated[
    Union[PrimitiveType, PointerType, SequenceType, MapType, StructType, OpaqueType],
    Field(discriminator="kind"),
]


# --- Authoring sugar --- #

def _expand_shorthand(v: Any) -> Any:
    """
    Accept a bare kind name for kinds that need no further parameters:
    `"string"` -> `{"kind": "string"}`. Known kind names are normalized;
    unknown ones are left for the discriminator to reject.
    """
    if isinstance(v, (str, Kind)):
        kind = Kind.parse(v)
        raw = v.value if isinstance(v, Kind) else v.strip().lower()
        if kind is Kind.INVALID and raw != Kind.INVALID.value:
            raise ValueError(f"Unknown kind {raw!r}")
        if kind in PRIMITIVE_KINDS or kind in OPAQUE_KINDS:
            return {"kind": kind.value}
        raise ValueError(f"Kind {kind.value!r} cannot be written in shorthand form")
    if isinstance(v, dict) and isinstance(v.get("kind"), str):
        kind = Kind.parse(v["kind"])
        if kind is not Kind.INVALID:
            return {**v, "kind": kind.value}
    return v


DescriptorField = Annotated[TypeDescriptor, BeforeValidator(_expand_shorthand)]


# --- Forward-Ref Resolution --- #

for _cls in (PointerType, SequenceType, MapType, FieldDef, StructType):
    _cls.model_rebuild()
