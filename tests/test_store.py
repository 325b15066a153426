import json
import os

import pytest

from newcity_monitor.models import Item
from newcity_monitor.store import MalformedPriorData, load_snapshot, save_snapshot


def test_missing_cache_is_empty(tmp_path):
    assert load_snapshot(tmp_path / "nope.json") == {}


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "cache.json"
    snap = {"Originals": [Item("Choco", "Rich", ("E",)), Item("Mint")]}
    save_snapshot(path, snap)

    assert load_snapshot(path) == snap
    assert not (tmp_path / "nested" / "cache.json.tmp").exists()
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "Originals": [
            {"name": "Choco", "description": "Rich", "attribute_codes": ["E"]},
            {"name": "Mint", "description": "", "attribute_codes": []},
        ]
    }


@pytest.mark.skipif(os.name != "posix", reason="file modes")
def test_cache_is_private(tmp_path):
    path = tmp_path / "cache.json"
    save_snapshot(path, {})
    assert path.stat().st_mode & 0o777 == 0o600


def test_save_overwrites(tmp_path):
    path = tmp_path / "cache.json"
    save_snapshot(path, {"A": [Item("one")], "B": [Item("two")]})
    save_snapshot(path, {"C": [Item("three")]})
    assert load_snapshot(path) == {"C": [Item("three")]}


def test_reads_legacy_keys(tmp_path):
    path = tmp_path / "newcity.json"
    path.write_text(
        json.dumps({
            "New City Originals": [
                {"Name": "Choco", "Description": "Rich", "RawDetails": ["E", "G"]},
                {"Name": "Mint", "Description": "Cool", "RawDetails": None},
            ]
        }),
        encoding="utf-8",
    )
    assert load_snapshot(path) == {
        "New City Originals": [Item("Choco", "Rich", ("E", "G")), Item("Mint", "Cool")]
    }


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"A": "not a list"}',
        '{"A": [1, 2]}',
        '{"A": [{"description": "no name"}]}',
        '{"A": [{"name": "x", "attribute_codes": "E"}]}',
    ],
)
def test_malformed_cache(tmp_path, content):
    path = tmp_path / "cache.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(MalformedPriorData):
        load_snapshot(path)


def test_cache_path_is_directory(tmp_path):
    with pytest.raises(MalformedPriorData):
        load_snapshot(tmp_path)
