#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions: dictionary merge, JSON/YAML file
    loading, and import of `module:attribute` targets.
"""

import importlib
import json
from pathlib import Path
from typing import Any, Dict

import yaml

from jschema.core.constants import DEFAULT_TEXT_ENCODING


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def import_object(target: str) -> Any:
    """
    Import `module:attr` (or `module.attr`) and return the attribute.

    Raises:
        ValueError: if the target has no attribute part
        ImportError / AttributeError: if the module or attribute is missing
    """
    module_name, sep, attr = target.partition(":")
    if not sep:
        module_name, _, attr = target.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Invalid import target {target!r}; expected 'module:attribute'")
    obj = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e


def load_data_file(path: Path) -> Any:
    """
    Load instance data from a JSON or YAML file (chosen by extension).

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the content cannot be parsed
    """
    if not path.exists():
        raise FileNotFoundError(f"The file {str(path)!r} does not exist")
    text = path.read_text(encoding=DEFAULT_TEXT_ENCODING)
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
            ) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {str(path)!r}: {e}") from e
