#!/usr/bin/env python3
"""
Reusable metadata carriers.

Embed `Base` in a type through a field tagged `jschema="schema"` to give the
generated document hypermedia links:

    @dataclass
    class Account:
        name: str
        base: Annotated[Base, Tags(jschema="schema")] = field(default_factory=Base)

None of these fields become schema properties; they are read by the
metadata harvester only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, List

from jschema.core.tags import Tags


@dataclass
class BaseLink:
    """One link of a `Base`."""
    title: Annotated[str, Tags(json="-", jschema="links-title")] = ""              # API title
    description: Annotated[str, Tags(json="-", jschema="links-description")] = ""  # API description
    method: Annotated[str, Tags(json="-", jschema="links-method")] = ""            # GET or POST
    href: Annotated[str, Tags(json="-", jschema="links-href")] = ""                # full URL
    rel: Annotated[str, Tags(json="-", jschema="links-rel")] = ""                  # self, ...


@dataclass
class Base:
    """Document id, description and links."""
    id: Annotated[str, Tags(json="-", jschema="id")] = ""
    description: Annotated[str, Tags(json="-", jschema="description")] = ""
    links: Annotated[List[BaseLink], Tags(json="-", jschema="links")] = field(default_factory=list)
