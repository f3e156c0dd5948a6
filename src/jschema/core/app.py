#!/usr/bin/env python3
"""
Purpose:
    Process-wide cache of the jschema `AppContext`. The first call loads the
    layered configuration and scans the descriptor roots once; later calls
    reuse that registry until a reload or an override asks for a rebuild.
"""
from typing import Optional, Dict, Any, Iterable
from pathlib import Path

from jschema.core.app_context import AppContext, build_context

# --- Module state --- #

_CTX: Optional[AppContext] = None


# --- Public API --- #

def get_context(
    *,
    force_reload: bool = False,
    config_override: Optional[Dict[str, Any]] = None,
    descriptor_roots_override: Optional[Iterable[Path]] = None,
) -> AppContext:
    """
    Return the cached `AppContext`, building it on first use.

    A build revalidates the harvest options and output indent from the
    configuration and rescans every descriptor root, so the registry reflects
    the JSON/YAML descriptor files present at that moment.

    Args:
        force_reload:
            Rebuild even when cached; picks up descriptor files added, edited
            or removed since the last scan, and configuration changes.
        config_override:
            Configuration dict used instead of the layered files and env.
            Always rebuilds; the result replaces the cached context.
        descriptor_roots_override:
            Directories scanned instead of `config['descriptor_paths']`.
            Always rebuilds; the result replaces the cached context.

    Returns:
        An `AppContext` whose descriptor registry has been loaded.
    """
    global _CTX
    if _CTX is None or force_reload or config_override or descriptor_roots_override:
        _CTX = build_context(
            config=config_override,
            descriptor_roots=descriptor_roots_override,
            preload=True,
        )
    return _CTX
