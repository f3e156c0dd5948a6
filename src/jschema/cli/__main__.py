#!/usr/bin/env python3

import argparse
import sys

from jschema.core.app import get_context
from jschema.core.formatting import format_validation_errors
from jschema.core.logging_setup import configure_logging
from jschema.cli import config, descriptors, generate


def main():
    parser = argparse.ArgumentParser(prog="jschema", description="JSON-Schema generator for typed structures")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they accept ctx)
    generate.register(subparsers)
    descriptors.register(subparsers)
    config.register(subparsers)

    args = parser.parse_args()
    if hasattr(args, "func"):
        try:
            ctx = get_context()  # built once
            configure_logging(ctx.config)
        except ValueError as e:
            for line in format_validation_errors(e):
                print(f"Invalid configuration: {line}", file=sys.stderr)
            sys.exit(1)
        sys.exit(args.func(args, ctx))
    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
