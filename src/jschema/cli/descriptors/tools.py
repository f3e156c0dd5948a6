#!/usr/bin/env python3
import json

from jschema.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("types", help="Type descriptor utilities")
    sps = sp.add_subparsers(dest="types_cmd")

    # default when user runs: `jschema types`
    def types_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=types_default)

    lp = sps.add_parser("list", help="List type descriptors")
    lp.add_argument("--all", action="store_true", help="Include invalid descriptors")
    lp.add_argument("--invalid", action="store_true", help="Show only invalid descriptors")
    lp.add_argument("--json", action="store_true", help="JSON output")
    lp.set_defaults(func=list_descriptors)

    ssp = sps.add_parser("show", help="Show a type descriptor as JSON")
    ssp.add_argument("name", help="Descriptor name")
    ssp.set_defaults(func=show_descriptor)


def list_descriptors(args, ctx: AppContext) -> int:
    print("Searched descriptor_paths:", ", ".join(ctx.config.get("descriptor_paths", [])) or "<none>")

    if args.invalid:
        entries = ctx.descriptors.invalid_entries()
    elif args.all:
        entries = ctx.descriptors.entries()
    else:
        entries = ctx.descriptors.valid_entries()

    if args.json:
        payload = [{
            "name": e.name,
            "valid": e.valid,
            "path": str(e.path),
            "fields": e.fields,
            "reason": e.reason,
        } for e in entries]
        print(json.dumps(payload, indent=2))
        return 0 if payload else 1

    if not entries:
        print("No type descriptors found.")
        return 1

    print("\nType descriptors found:")
    for e in sorted(entries, key=lambda x: (not x.valid, x.name)):
        if e.valid:
            status = f"✓ valid ({e.fields} fields)"
        else:
            status = f"✗ invalid ({(e.reason or '').splitlines()[0] if e.reason else 'unknown'})"
        print(f"  - {e.name:24} {status:35}  {e.path}")
    return 0


def show_descriptor(args, ctx: AppContext) -> int:
    try:
        d = ctx.descriptors.require(args.name)
    except LookupError as e:
        print(str(e))
        return 1
    print(json.dumps(d.model_dump(by_alias=True), indent=2))
    return 0
