#!/usr/bin/env python3
import json
from pathlib import Path

import pytest

from jschema.core.utils import import_object, load_data_file, load_json_file, merge_dicts


# --- merge_dicts --- #

def test_merge_dicts_recursive_and_non_mutating():
    base = {"a": 1, "nested": {"x": 1, "y": 2}}
    override = {"b": 2, "nested": {"y": 3}}

    result = merge_dicts(base, override)

    assert result == {"a": 1, "b": 2, "nested": {"x": 1, "y": 3}}
    assert base == {"a": 1, "nested": {"x": 1, "y": 2}}


def test_merge_dicts_non_dict_overrides_dict():
    assert merge_dicts({"k": {"x": 1}}, {"k": [1, 2]}) == {"k": [1, 2]}


# --- load_json_file --- #

def test_load_json_file_missing_returns_empty(tmp_path: Path):
    assert load_json_file(tmp_path / "none.json") == {}


def test_load_json_file_reads_and_rejects(tmp_path: Path):
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"a": 1}), encoding="utf-8")
    assert load_json_file(good) == {"a": 1}

    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match=r"Invalid JSON"):
        load_json_file(bad)


# --- load_data_file --- #

@pytest.mark.parametrize("name,text", [
    ("v.json", '{"name": "x", "links": [{"href": "/a"}]}'),
    ("v.yaml", "name: x\nlinks:\n  - href: /a\n"),
    ("v.yml", "{name: x, links: [{href: /a}]}"),
])
def test_load_data_file_formats(tmp_path: Path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    assert load_data_file(p) == {"name": "x", "links": [{"href": "/a"}]}


def test_load_data_file_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_data_file(tmp_path / "missing.json")

    bad = tmp_path / "bad.yaml"
    bad.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match=r"Invalid YAML"):
        load_data_file(bad)


# --- import_object --- #

@pytest.mark.parametrize("target", [
    "jschema.core.base_types:Base",
    "jschema.core.base_types.Base",
])
def test_import_object(target):
    from jschema.core.base_types import Base
    assert import_object(target) is Base


def test_import_object_nested_attribute():
    from jschema.core.schema.nodes import Document
    assert import_object("jschema.core.schema.nodes:Document.to_json") is Document.to_json


@pytest.mark.parametrize("target,exc", [
    ("nomodule", ValueError),
    ("jschema.core.base_types:", ValueError),
    ("jschema.core.base_types:Missing", AttributeError),
    ("jschema_no_such_module:X", ImportError),
])
def test_import_object_errors(target, exc):
    with pytest.raises(exc):
        import_object(target)
