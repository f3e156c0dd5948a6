#!/usr/bin/env python3
"""
jschema configuration loader.
"""

import os
from pathlib import Path
from typing import Any, Dict, Final, List, Optional

from jschema.core.constants import DEFAULT_JSON_INDENT
from jschema.core.schema.harvest import HarvestOptions
from jschema.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "descriptor_paths": [str(Path("./type_descriptors").resolve())],
    "output": {"indent": DEFAULT_JSON_INDENT},
    "harvest": {"link_merge": "last-write-wins", "metadata_source": "container"},
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "jschema" / "config.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load jschema configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/jschema/config.json)
        3. Project config (./jschema.json)
        4. Environment overrides:
           - JSCHEMA_DESCRIPTOR_PATHS (pathsep-separated list)
           - JSCHEMA_INDENT
           - JSCHEMA_LINK_MERGE
           - JSCHEMA_METADATA_SOURCE
           - JSCHEMA_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = dict(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / "jschema.json"
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    descriptor_paths_env = os.getenv("JSCHEMA_DESCRIPTOR_PATHS")
    if descriptor_paths_env:
        config["descriptor_paths"] = _split_paths_env(descriptor_paths_env)

    indent_env = os.getenv("JSCHEMA_INDENT")
    if indent_env:
        config = merge_dicts(config, {"output": {"indent": _parse_indent(indent_env)}})

    link_merge_env = os.getenv("JSCHEMA_LINK_MERGE")
    if link_merge_env:
        config = merge_dicts(config, {"harvest": {"link_merge": link_merge_env}})

    metadata_source_env = os.getenv("JSCHEMA_METADATA_SOURCE")
    if metadata_source_env:
        config = merge_dicts(config, {"harvest": {"metadata_source": metadata_source_env}})

    log_level_env = os.getenv("JSCHEMA_LOG_LEVEL")
    if log_level_env:
        config = merge_dicts(config, {"logging": {"level": log_level_env}})

    return config


def harvest_options(config: Dict[str, Any]) -> HarvestOptions:
    """
    Validate the `harvest` section into `HarvestOptions`.

    Raises:
        ValidationError: if a switch has an unknown value.
    """
    return HarvestOptions.model_validate(config.get("harvest") or {})


def output_indent(config: Dict[str, Any]) -> Optional[int]:
    """Indentation for JSON output (`None` means compact)."""
    value = (config.get("output") or {}).get("indent", DEFAULT_JSON_INDENT)
    return None if value is None else _parse_indent(value)


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.

    Example:
        "a:~/b:/tmp" on Unix  -> ["a", "/home/user/b", "/tmp"] (no resolve here)
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]


def _parse_indent(value: Any) -> int:
    try:
        indent = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid indent {value!r}: expected a non-negative integer") from e
    if indent < 0:
        raise ValueError(f"Invalid indent {value!r}: expected a non-negative integer")
    return indent
