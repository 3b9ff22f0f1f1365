"""Tests for the canonical JSON output layer."""

import json
from pathlib import Path

from sessionizer.model.entry import ScanEntry
from sessionizer.utils.json_norm import stable_json_dump, stable_json_dumps


def test_stable_json_dumps_sorts_keys_and_adds_newline():
    s = stable_json_dumps({"b": 1, "a": 2})
    assert s.endswith("\n")
    assert s.index('"a"') < s.index('"b"')


def test_stable_json_dumps_normalizes_paths():
    obj = json.loads(stable_json_dumps({"p": Path("a") / "b"}))
    assert obj["p"] == "a/b"


def test_stable_json_dumps_dataclasses():
    obj = json.loads(stable_json_dumps([ScanEntry("/x/y", "/x/y", "y")]))
    assert obj == [{"derived_name": "y", "identifier": "/x/y", "label": "/x/y"}]


def test_compact_output():
    assert stable_json_dumps(["find", "/b"], indent=None) == '["find", "/b"]\n'


def test_stable_json_dump_writes_to_file_like(tmp_path):
    out = tmp_path / "x.json"
    with out.open("w", encoding="utf-8") as f:
        stable_json_dump({"b": 1, "a": 2}, f)
    txt = out.read_text(encoding="utf-8")
    assert txt.endswith("\n")
    assert '"a"' in txt and '"b"' in txt
