#!/usr/bin/env python3
import json
import os
import time
from pathlib import Path

import pytest

from jschema.core.constants import DEFAULT_TEXT_ENCODING
from jschema.core.schema.registry import DescriptorRegistry


def _write_descriptor(path: Path, name: str, *, fields=None) -> Path:
    payload = {
        "name": name,
        "fields": fields if fields is not None else [{"name": "id", "type": "string"}],
    }
    path.write_text(json.dumps(payload), encoding=DEFAULT_TEXT_ENCODING)
    return path


# --- Loading & lookup --- #

def test_registry_loads_descriptors_and_resolves_by_name(tmp_path):
    root = tmp_path / "types"
    root.mkdir()

    _write_descriptor(root / "alpha.json", "alpha")
    (root / "beta.yaml").write_text(
        "name: Beta\nfields:\n  - name: title\n    type: string\n",
        encoding=DEFAULT_TEXT_ENCODING,
    )

    reg = DescriptorRegistry([root])
    reg.load()

    assert reg.loaded is True
    assert reg.names() == ["alpha", "beta"]
    assert reg.get("Alpha").name == "alpha"  # case-insensitive
    assert reg.get("beta").fields[0].name == "title"


def test_registry_name_defaults_to_file_stem(tmp_path):
    (tmp_path / "gamma.yml").write_text(
        "fields:\n  - {name: x, type: int}\n", encoding=DEFAULT_TEXT_ENCODING,
    )
    reg = DescriptorRegistry([tmp_path])
    reg.load()
    assert reg.names() == ["gamma"]


def test_registry_require_raises_when_missing(tmp_path):
    reg = DescriptorRegistry([tmp_path])
    reg.load()
    with pytest.raises(LookupError, match=r"not found"):
        reg.require("nope")


def test_registry_require_success(tmp_path):
    _write_descriptor(tmp_path / "alpha.json", "alpha")
    reg = DescriptorRegistry([tmp_path])
    reg.load()
    assert reg.require("ALPHA").name == "alpha"


def test_registry_records_invalid_files(tmp_path):
    root = tmp_path / "types"
    root.mkdir()

    _write_descriptor(root / "ok.json", "ok")
    _write_descriptor(root / "bad.json", "bad", fields=[{"name": "x", "type": "complex128"}])
    (root / "broken.json").write_text("{not json", encoding=DEFAULT_TEXT_ENCODING)
    (root / "list.yaml").write_text("- a\n- b\n", encoding=DEFAULT_TEXT_ENCODING)

    reg = DescriptorRegistry([root])
    reg.load()

    assert reg.names() == ["ok"]
    invalid = {e.name: e for e in reg.invalid_entries()}
    assert set(invalid) == {"bad", "broken", "list"}
    assert "Unknown kind" in invalid["bad"].reason
    assert "Unreadable" in invalid["broken"].reason
    assert "mapping" in invalid["list"].reason


def test_registry_handles_nonexistent_root(tmp_path):
    reg = DescriptorRegistry([tmp_path / "nope"])
    reg.load()
    assert reg.loaded is True
    assert reg.names() == []


def test_deduplication_newest_mtime_wins_and_entries_mark_losers(tmp_path: Path):
    root = tmp_path / "types"
    root.mkdir()

    older = _write_descriptor(root / "alpha_old.json", "alpha", fields=[{"name": "a", "type": "int"}])
    newer = _write_descriptor(root / "alpha_new.json", "alpha", fields=[
        {"name": "a", "type": "int"},
        {"name": "b", "type": "int"},
    ])
    t0 = time.time()
    os.utime(older, (t0 - 10, t0 - 10))
    os.utime(newer, (t0, t0))
    _write_descriptor(root / "beta.json", "beta")

    reg = DescriptorRegistry([root])
    reg.load()

    assert reg.names() == ["alpha", "beta"]
    assert [f.name for f in reg.get("alpha").fields] == ["a", "b"]

    winners = reg.valid_entries()
    assert {(e.name, e.reason) for e in winners} == {("alpha", "kept"), ("beta", "kept")}
    assert next(e for e in winners if e.name == "alpha").fields == 2

    losers = reg.invalid_entries()
    assert [(e.name, e.reason, e.path) for e in losers] == [
        ("alpha", "duplicate-dropped", older.resolve()),
    ]


def test_unsupported_extensions_are_ignored(tmp_path: Path):
    _write_descriptor(tmp_path / "ok.json", "ok")
    (tmp_path / "ignore.txt").write_text("not a descriptor", encoding=DEFAULT_TEXT_ENCODING)

    reg = DescriptorRegistry([tmp_path])
    reg.load()

    assert reg.names() == ["ok"]
    assert all(e.path.suffix.lower() == ".json" for e in reg.entries())


def test_clear_false_appends_scan_results(tmp_path: Path):
    _write_descriptor(tmp_path / "one.json", "one")
    reg = DescriptorRegistry([tmp_path])
    reg.load()
    first = len(reg.entries())

    _write_descriptor(tmp_path / "two.json", "two")
    reg.load(clear=False)

    assert reg.names() == ["one", "two"]
    assert len(reg.entries()) >= first + 1


def test_roots_property(tmp_path: Path):
    a, b = tmp_path / "a", tmp_path / "b"
    reg = DescriptorRegistry([a, b])
    assert reg.roots == [a, b]
    assert reg.loaded is False
