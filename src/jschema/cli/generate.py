#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import Any, Tuple

from jschema.core.app_context import AppContext
from jschema.core.document import build_document
from jschema.core.formatting import format_validation_errors
from jschema.core.schema.harvest import HarvestOptions
from jschema.core.schema.introspect import describe, describe_value
from jschema.core.schema.type_descriptor import StructType, TypeDescriptor
from jschema.core.utils import import_object, load_data_file


def register(subparsers):
    gp = subparsers.add_parser("generate", help="Generate a JSON-Schema document")
    gp.add_argument("target", help="module:Class, registered descriptor name, or descriptor file")
    gp.add_argument("--value", type=Path, help="Instance data (JSON/YAML) read by the metadata harvest")
    gp.add_argument("--indent", type=int, help="Indentation of the JSON output")
    gp.add_argument("--link-merge", choices=["last-write-wins", "per-element"],
                    help="How fields of a link sequence combine into links")
    gp.add_argument("--metadata-source", choices=["container", "field"],
                    help="Where id/description strings are read from")
    gp.add_argument("-o", "--output", type=Path, help="Write to file instead of stdout")
    gp.set_defaults(func=generate_schema)


def generate_schema(args, ctx: AppContext) -> int:
    try:
        data = load_data_file(args.value) if args.value else None
        descriptor, value = resolve_target(args.target, ctx, data)
    except (ImportError, AttributeError, LookupError, OSError, ValueError) as e:
        for line in format_validation_errors(e):
            print(f"Cannot load {args.target!r}: {line}", file=sys.stderr)
        return 1

    doc = build_document(value, descriptor=descriptor, options=_options(args, ctx))
    indent = args.indent if args.indent is not None else ctx.indent
    text = doc.to_json(indent=indent)

    if args.output:
        try:
            args.output.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            for line in format_validation_errors(e):
                print(f"Cannot write {args.output}: {line}", file=sys.stderr)
            return 1
        print(f"Wrote {args.output}")
    else:
        print(text)
    return 0


def resolve_target(target: str, ctx: AppContext, data: Any) -> Tuple[TypeDescriptor, Any]:
    """
    Return (descriptor, value) for a CLI target.

    - an existing file path     -> declarative descriptor, value = data
    - `module:attr`             -> a class (descriptor of the class, value = data)
                                   or an instance (its own descriptor and value)
    - anything else             -> registered descriptor name, value = data
    """
    p = Path(target)
    if p.suffix and p.exists():
        return StructType.from_file(p), data

    if ":" in target:
        obj = import_object(target)
        if isinstance(obj, type):
            return describe(obj), data
        return describe_value(obj), obj

    return ctx.descriptors.require(target), data


def _options(args, ctx: AppContext) -> HarvestOptions:
    overrides = {
        k: v for k, v in (("link_merge", args.link_merge), ("metadata_source", args.metadata_source))
        if v is not None
    }
    return HarvestOptions.model_validate({**ctx.options.model_dump(), **overrides})
