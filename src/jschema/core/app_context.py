#!/usr/bin/env python3
"""
Purpose:
    Wires together the jschema application context by merging configuration,
    validating harvest options, and initializing the descriptor registry.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from jschema.core.config import harvest_options, load_config, output_indent
from jschema.core.schema.harvest import HarvestOptions
from jschema.core.schema.registry import DescriptorRegistry


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, harvest options and the registry."""
    config: Dict[str, Any]
    options: HarvestOptions
    indent: Optional[int]
    descriptors: DescriptorRegistry


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    descriptor_roots: Optional[Iterable[Path]] = None,
    preload: bool = True,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        descriptor_roots:
            Optional override for descriptor search paths. Defaults to `config['descriptor_paths']`.
        preload:
            If True, eagerly loads the registry; otherwise, caller may load later.

    Returns:
        AppContext: immutable bundle of config, options, and descriptor registry.
    """
    cfg = config or load_config()

    roots = [Path(p) for p in (descriptor_roots or cfg.get("descriptor_paths", []))]
    registry = DescriptorRegistry(roots)
    if preload:
        registry.load(clear=True)

    return AppContext(
        config=cfg,
        options=harvest_options(cfg),
        indent=output_indent(cfg),
        descriptors=registry,
    )
