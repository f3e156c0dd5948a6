#!/usr/bin/env python3
"""
Formatting helpers for jschema.

- Stable one-line messages for Pydantic v2 `ValidationError`s raised while
  loading type descriptors and configuration.
"""
from __future__ import annotations

from typing import Any, Iterable, List

from pydantic import ValidationError

from jschema.core.schema.kind import Kind

_DISCRIMINATOR_TAGS = frozenset(k.value for k in Kind)


# --- Public API --- #

def format_validation_errors(exc: Exception) -> List[str]:
    """
    Return one `path: message` line per error of a Pydantic ValidationError.

    Example:
        fields[1].type.kind: Input should be 'bool', 'int', ...

    Any other exception yields the first line of its message.
    """
    if not isinstance(exc, ValidationError):
        text = str(exc).strip()
        return [text.splitlines()[0] if text else type(exc).__name__]

    return [f"{_format_error_loc(err.get('loc', ()))}: {err.get('msg', 'Validation error')}"
            for err in exc.errors()]


# --- Internals --- #

def _format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert an error `loc` tuple into a dotted path with index suffixes.
    Discriminator tags (e.g. 'struct', 'pointer') are dropped.

        ('fields', 1, 'type', 'struct', 'name') -> "fields[1].type.name"
        ()                                      -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        elif seg in _DISCRIMINATOR_TAGS:
            continue
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
