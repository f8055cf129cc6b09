import json
import sqlite3
from pathlib import Path

import pytest

from quicklink.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore
from quicklink.model import LinkEntry
from quicklink.persistence import DEFAULT_STORAGE_KEY, FailingPersistence, LinkPersistence, PersistError


def _links():
    return [
        LinkEntry(id="A", title="Apple", url_string="https://www.apple.com"),
        LinkEntry(id="B", title=None, url_string="https://example.com"),
    ]


class _BrokenKV(MemoryKeyValueStore):
    def set(self, key, value):
        raise sqlite3.OperationalError("database is locked")


def test_save_writes_json_with_original_field_names():
    kv = MemoryKeyValueStore()
    LinkPersistence(kv).save(_links())

    data = json.loads(kv.get("quicklink.links").decode("utf-8"))
    assert data == [
        {"id": "A", "title": "Apple", "urlString": "https://www.apple.com"},
        {"id": "B", "urlString": "https://example.com"},
    ]
    assert DEFAULT_STORAGE_KEY == "quicklink.links"


def test_load_missing_slot_is_empty():
    assert LinkPersistence(MemoryKeyValueStore()).load() == []


def test_save_then_load_roundtrip_sqlite(tmp_path: Path):
    db = tmp_path / "links.sqlite"
    LinkPersistence(SQLiteKeyValueStore(db)).save(_links())
    assert LinkPersistence(SQLiteKeyValueStore(db)).load() == _links()


def test_load_reads_payload_written_by_the_mac_app():
    raw = b'[{"id":"E621E1F8-C36C-495A-93FC-0C247A3E6E5F","title":"Docs","urlString":"https://docs.example"}]'
    kv = MemoryKeyValueStore({"quicklink.links": raw})
    got = LinkPersistence(kv).load()
    assert got == [LinkEntry(id="E621E1F8-C36C-495A-93FC-0C247A3E6E5F", title="Docs", url_string="https://docs.example")]


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"\xff\xfe",
        b'{"id": "A"}',
        b'[{"id": "A"}]',
        b'[{"title": "x", "urlString": "https://a"}]',
        b'[{"id": 7, "urlString": "https://a"}]',
    ],
)
def test_load_undecodable_payload_falls_back_to_empty(raw):
    kv = MemoryKeyValueStore({"quicklink.links": raw})
    assert LinkPersistence(kv).load() == []


def test_load_ignores_unknown_fields_and_drops_duplicate_ids():
    raw = json.dumps(
        [
            {"id": "A", "urlString": "https://a", "extra": 1},
            {"id": "A", "urlString": "https://dup"},
            {"id": "B", "title": None, "urlString": "https://b"},
        ]
    ).encode("utf-8")
    got = LinkPersistence(MemoryKeyValueStore({"quicklink.links": raw})).load()
    assert [(e.id, e.url_string) for e in got] == [("A", "https://a"), ("B", "https://b")]


def test_storage_failure_raises_persist_error_and_keeps_prior_value():
    kv = _BrokenKV({"quicklink.links": b"[]"})
    with pytest.raises(PersistError) as exc:
        LinkPersistence(kv).save(_links())
    assert "database is locked" in str(exc.value)
    assert kv.get("quicklink.links") == b"[]"


def test_encode_failure_raises_persist_error():
    kv = MemoryKeyValueStore()
    with pytest.raises(PersistError):
        LinkPersistence(kv).save([LinkEntry(id="", title=None, url_string="https://a")])
    assert kv.get("quicklink.links") is None


def test_custom_slot_name():
    kv = MemoryKeyValueStore()
    LinkPersistence(kv, key="other.slot").save(_links())
    assert kv.get("other.slot") is not None
    assert kv.get("quicklink.links") is None


def test_failing_persistence_never_writes_but_still_loads():
    kv = MemoryKeyValueStore()
    inner = LinkPersistence(kv)
    inner.save(_links())
    before = kv.get("quicklink.links")

    failing = FailingPersistence(inner)
    with pytest.raises(PersistError, match="Simulated save failure"):
        failing.save([])
    assert kv.get("quicklink.links") == before
    assert failing.load() == _links()
