"""Tests for the reattach persistence stores."""

from __future__ import annotations

import json

import pytest

from reattach.constants import STORE_GROUP
from reattach.history import ReAttachHistory
from reattach.repository import HistoryRepository
from reattach.store import JsonFileStore, MemoryStore, StoreError
from reattach.target import Target


def test_memory_store_read_of_missing_group_is_none():
    store = MemoryStore()
    assert store.open_group("missing") is None
    assert "missing" not in store.groups


def test_memory_store_writable_open_creates_group():
    store = MemoryStore()
    group = store.open_group("g", writable=True)
    group.set_value("a", "1")
    group.close()
    reader = store.open_group("g")
    assert reader.get_value("a") == "1"
    assert reader.get_value("b") is None


def test_read_only_handle_rejects_writes():
    store = MemoryStore({"g": {"a": "1"}})
    group = store.open_group("g")
    with pytest.raises(StoreError):
        group.set_value("a", "2")
    with pytest.raises(StoreError):
        group.delete_value("a")


def test_closed_handle_rejects_access():
    group = MemoryStore().open_group("g", writable=True)
    group.close()
    group.close()
    with pytest.raises(StoreError):
        group.get_value("a")


def test_delete_missing_value_is_not_an_error():
    group = MemoryStore().open_group("g", writable=True)
    group.delete_value("nothing")


def test_file_store_missing_file_has_no_groups(store_path):
    store = JsonFileStore(store_path)
    assert store.open_group(STORE_GROUP) is None
    assert not store_path.exists()


def test_file_store_flushes_on_close(store_path):
    store = JsonFileStore(store_path)
    group = store.open_group(STORE_GROUP, writable=True)
    group.set_value("slot1", "value")
    assert not store_path.exists()
    group.close()
    assert json.loads(store_path.read_text(encoding="utf-8")) == {STORE_GROUP: {"slot1": "value"}}
    assert not store_path.with_name(store_path.name + ".tmp").exists()


def test_file_store_keeps_other_groups(store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_text(json.dumps({"other": {"x": "y"}}), encoding="utf-8")
    store = JsonFileStore(store_path)
    group = store.open_group(STORE_GROUP, writable=True)
    group.set_value("slot1", "value")
    group.close()
    data = json.loads(store_path.read_text(encoding="utf-8"))
    assert data["other"] == {"x": "y"}
    assert data[STORE_GROUP] == {"slot1": "value"}


def test_file_store_corrupt_file_reads_empty(store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(store_path)
    assert store.open_group(STORE_GROUP) is None
    group = store.open_group(STORE_GROUP, writable=True)
    group.set_value("slot1", "value")
    group.close()
    assert store.open_group(STORE_GROUP).get_value("slot1") == "value"


def test_file_store_undecodable_file_reads_empty(store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_bytes(b"\xff\xfe\x00garbage")
    store = JsonFileStore(store_path)
    assert store.open_group(STORE_GROUP) is None
    history = ReAttachHistory(HistoryRepository(store))
    history.add_first(Target(1, "a.exe", "bob"))
    assert history.save()
    reloaded = ReAttachHistory(HistoryRepository(JsonFileStore(store_path)))
    assert reloaded.load()
    assert [t.process_path for t in reloaded.items] == ["a.exe"]


def test_file_store_write_failure_raises_store_error(store_path):
    store = JsonFileStore(store_path)
    group = store.open_group(STORE_GROUP, writable=True)
    group.set_value("slot1", "value")
    store_path.parent.write_text("", encoding="utf-8")
    with pytest.raises(StoreError):
        group.close()


def test_history_survives_process_restart(store_path):
    first = ReAttachHistory(HistoryRepository(JsonFileStore(store_path)))
    first.add_first(Target(1, r"C:\svc\a.exe", "bob"))
    first.add_first(Target(2, r"C:\svc\b.exe", "bob"))
    assert first.save()

    second = ReAttachHistory(HistoryRepository(JsonFileStore(store_path)))
    assert second.load()
    assert [t.process_name for t in second.items] == ["b.exe", "a.exe"]


def test_history_save_to_unwritable_file_fails(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    history = ReAttachHistory(HistoryRepository(JsonFileStore(blocker / "history.json")))
    history.add_first(Target(1, "a.exe", "bob"))
    assert not history.save()
    assert len(history.items) == 1


def test_file_store_unreadable_path_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(StoreError):
        JsonFileStore(blocker / "history.json").open_group(STORE_GROUP)
