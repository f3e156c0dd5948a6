#!/usr/bin/env python3
"""
Purpose:
    Builds type descriptors from Python type annotations: builtins and their
    subclasses, `NewType` aliases, typing generics, `Optional`, dataclasses,
    Pydantic models and plain annotated classes. Field tags are read from
    `Annotated[T, Tags(...)]` or from dataclass field metadata built with
    `tags(...)`.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import logging
import types
import typing
from enum import Enum
from typing import Annotated, Any, Dict, List, Tuple, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from jschema.core.schema.kind import Kind
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
from jschema.core.tags import Annotation, Tags, tags_from_metadata

logger = logging.getLogger(__name__)


_SEQUENCE_ORIGINS = frozenset({
    list, set, frozenset,
    cabc.Sequence, cabc.MutableSequence, cabc.Set, cabc.MutableSet,
    cabc.Collection, cabc.Iterable,
})
_MAPPING_ORIGINS = frozenset({dict, cabc.Mapping, cabc.MutableMapping})
_UNION_ORIGINS = frozenset({Union, types.UnionType})
_BYTES_TYPES = (bytes, bytearray, memoryview)


# --- Public API --- #

def describe(tp: Any) -> TypeDescriptor:
    """
    Return the type descriptor for the Python type `tp`.

    >>> describe(int)
    PrimitiveType(kind='int')
    >>> describe(list[str]).elem
    PrimitiveType(kind='string')
    """
    return _Introspector().describe(tp)


def describe_value(value: Any) -> TypeDescriptor:
    """Return the descriptor of `type(value)`."""
    return describe(type(value))


def is_struct_type(tp: Any) -> bool:
    """True if `tp` is a class whose annotated attributes become struct fields."""
    if not isinstance(tp, type) or tp.__module__ == "builtins" or issubclass(tp, Enum):
        return False
    if dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel):
        return True
    return bool(getattr(tp, "__annotations__", None))


# --- Internals --- #

class _Introspector:
    """
    Single-use walker. Struct descriptors are cached per class so that a
    self-referencing type yields a cyclic descriptor graph instead of
    recursing forever.
    """

    def __init__(self) -> None:
        self._structs: Dict[type, StructType] = {}

    def describe(self, tp: Any) -> TypeDescriptor:
        tp, _ = _split_annotated(tp)
        while hasattr(tp, "__supertype__"):
            # typing.NewType
            tp = tp.__supertype__

        kind = Kind.from_python_type(tp)
        if kind is not Kind.INVALID:
            return PrimitiveType(kind=kind.value)
        if tp in _BYTES_TYPES:
            return SequenceType(elem=PrimitiveType(kind=Kind.UINT8.value))
        if tp is Any or tp is object or tp is None or tp is type(None):
            return OpaqueType(kind=Kind.ANY.value)

        origin, args = get_origin(tp), get_args(tp)
        if origin in _UNION_ORIGINS:
            return self._describe_union(args)
        if origin is tuple or tp is tuple:
            return self._describe_tuple(args)
        if origin in _SEQUENCE_ORIGINS or tp in (list, set, frozenset):
            return SequenceType(elem=self._describe_arg(args, 0))
        if origin in _MAPPING_ORIGINS or tp is dict:
            return MapType(key=self._describe_arg(args, 0), value=self._describe_arg(args, 1))
        if origin is cabc.Callable or tp is cabc.Callable:
            return OpaqueType(kind=Kind.FUNC.value)
        if is_struct_type(tp):
            return self._describe_struct(tp)
        return OpaqueType(kind=Kind.ANY.value)

    def _describe_arg(self, args: Tuple[Any, ...], index: int) -> TypeDescriptor:
        if len(args) > index:
            return self.describe(args[index])
        return OpaqueType(kind=Kind.ANY.value)

    def _describe_union(self, args: Tuple[Any, ...]) -> TypeDescriptor:
        """`Optional[X]` is a pointer to X; any other union has no single shape."""
        present = [a for a in args if a is not type(None)]
        if len(present) == 1 and len(args) == 2:
            return PointerType(elem=self.describe(present[0]))
        return OpaqueType(kind=Kind.ANY.value)

    def _describe_tuple(self, args: Tuple[Any, ...]) -> TypeDescriptor:
        """`tuple[X, ...]` and homogeneous fixed tuples are sequences of X."""
        if len(args) == 2 and args[1] is Ellipsis:
            return SequenceType(elem=self.describe(args[0]))
        if args and all(a == args[0] for a in args):
            return SequenceType(elem=self.describe(args[0]))
        if not args:
            return SequenceType(elem=OpaqueType(kind=Kind.ANY.value))
        return OpaqueType(kind=Kind.ANY.value)

    def _describe_struct(self, tp: type) -> StructType:
        cached = self._structs.get(tp)
        if cached is not None:
            return cached

        struct = StructType(name=tp.__qualname__)
        self._structs[tp] = struct
        struct.fields.extend(self._struct_fields(tp))
        return struct

    def _struct_fields(self, tp: type) -> List[FieldDef]:
        out: List[FieldDef] = []
        for name, base, marker in _declared_fields(tp):
            json_tag, schema_tag = marker.annotations() if marker else (Annotation(), Annotation())
            out.append(FieldDef(
                name=name,
                type=self.describe(base),
                json_tag=json_tag,
                schema_tag=schema_tag,
            ))
        return out


def _split_annotated(tp: Any) -> Tuple[Any, Tags | None]:
    """Strip `Annotated[...]`, returning the bare type and its `Tags` marker (if any)."""
    if get_origin(tp) is not Annotated:
        return tp, None
    base, *extras = get_args(tp)
    marker = next((e for e in extras if isinstance(e, Tags)), None)
    return base, marker


def _resolve_hints(tp: type) -> Dict[str, Any]:
    """
    Resolve the class annotations, keeping `Annotated` extras. Unresolvable
    forward references leave the affected fields untyped (opaque).
    """
    try:
        return get_type_hints(tp, include_extras=True)
    except (NameError, TypeError) as e:
        logger.warning("Could not resolve annotations of %s: %s", tp.__qualname__, e)
        raw: Dict[str, Any] = {}
        for klass in reversed(tp.__mro__):
            raw.update(getattr(klass, "__annotations__", {}) or {})
        return {k: (Any if isinstance(v, str) else v) for k, v in raw.items()}


def _declared_fields(tp: type) -> List[Tuple[str, Any, Tags | None]]:
    """Return (field name, bare type, tags) triples in declaration order."""
    if issubclass(tp, BaseModel):
        out = []
        for name, info in tp.model_fields.items():
            marker = next((m for m in info.metadata if isinstance(m, Tags)), None)
            out.append((name, info.annotation, marker))
        return out

    hints = _resolve_hints(tp)
    if dataclasses.is_dataclass(tp):
        out = []
        for f in dataclasses.fields(tp):
            base, marker = _split_annotated(hints.get(f.name, Any))
            out.append((f.name, base, marker or tags_from_metadata(f.metadata)))
        return out

    out = []
    for name, hint in hints.items():
        if name.startswith("_") or hint is typing.ClassVar or get_origin(hint) is typing.ClassVar:
            continue
        base, marker = _split_annotated(hint)
        out.append((name, base, marker))
    return out
