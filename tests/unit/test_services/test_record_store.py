"""Tests for the record store and its cross-context notifications."""

import json

import pytest

from equipcare.services.record_store import (
    FileStorage,
    MemoryStorage,
    RecordStore,
    StorageChannel,
    StorageEvent,
    close_record_store,
    get_record_store,
)
from equipcare.utils.errors import RecordStoreError


@pytest.mark.unit
def test_read_absent_collection(store):
    assert store.read("dailyTasks") is None
    assert store.has("dailyTasks") is False


@pytest.mark.unit
def test_write_then_read(store):
    records = [{"id": "dt001", "taskName": "Oil check"}]
    store.write("dailyTasks", records)

    assert store.read("dailyTasks") == records


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["{not json", '{"id": "dt001"}', '[1, 2]', '"text"'])
def test_malformed_collection_reads_as_absent(store, raw):
    """Unparseable or wrongly shaped data never raises."""
    store.set_text("dailyTasks", raw)

    assert store.read("dailyTasks") is None


@pytest.mark.unit
def test_unserializable_write_is_rejected(store):
    with pytest.raises(RecordStoreError):
        store.write("dailyTasks", [{"id": "dt001", "when": object()}])

    assert store.read("dailyTasks") is None


@pytest.mark.unit
def test_other_context_is_notified(store, other_tab):
    """Writes reach the other context's listeners, with new and old raw values."""
    events = []
    other_tab.subscribe("dailyTasks", events.append)

    store.write("dailyTasks", [{"id": "dt001"}])
    store.write("dailyTasks", [{"id": "dt002"}])

    assert len(events) == 2
    assert events[1].key == "dailyTasks"
    assert json.loads(events[1].new_value) == [{"id": "dt002"}]
    assert json.loads(events[1].old_value) == [{"id": "dt001"}]
    assert other_tab.read("dailyTasks") == [{"id": "dt002"}]


@pytest.mark.unit
def test_writer_is_not_notified(store, other_tab):
    own_events = []
    store.subscribe("dailyTasks", own_events.append)

    store.write("dailyTasks", [{"id": "dt001"}])

    assert own_events == []
    assert store.read("dailyTasks") == [{"id": "dt001"}]


@pytest.mark.unit
def test_listeners_are_per_key(store, other_tab):
    events = []
    other_tab.subscribe("weeklyTasks", events.append)

    store.write("dailyTasks", [])

    assert events == []


@pytest.mark.unit
def test_unsubscribe_is_idempotent(store, other_tab):
    events = []
    unsubscribe = other_tab.subscribe("dailyTasks", events.append)

    unsubscribe()
    unsubscribe()
    store.write("dailyTasks", [])

    assert events == []
    assert store.channel.listener_count() == 0


@pytest.mark.unit
def test_failing_listener_does_not_break_writer(store, other_tab):
    """A listener error is logged; later listeners still run."""
    events = []

    def broken(event):
        raise RuntimeError("boom")

    other_tab.subscribe("dailyTasks", broken)
    other_tab.subscribe("dailyTasks", events.append)

    store.write("dailyTasks", [{"id": "dt001"}])

    assert len(events) == 1
    assert store.read("dailyTasks") == [{"id": "dt001"}]


@pytest.mark.unit
def test_remove_broadcasts_none(store, other_tab):
    events = []
    other_tab.subscribe("theme", events.append)
    store.set_text("theme", "dark")

    store.remove("theme")

    assert [event.new_value for event in events] == ["dark", None]
    assert store.get_text("theme") is None


@pytest.mark.unit
def test_storage_event_serializes_with_browser_names():
    event = StorageEvent(key="theme", new_value="dark")

    assert event.model_dump(by_alias=True) == {"key": "theme", "newValue": "dark", "oldValue": None}


@pytest.mark.unit
def test_contexts_get_distinct_ids(store):
    assert store.open_context().context_id != store.context_id


@pytest.mark.unit
def test_file_storage_round_trip(tmp_path):
    storage = FileStorage(tmp_path)
    first = RecordStore(storage=storage)
    second = RecordStore(storage=FileStorage(tmp_path))

    first.write("stockItems", [{"id": "stk001", "quantity": 5}])

    assert (tmp_path / "stockItems.json").exists()
    assert second.read("stockItems") == [{"id": "stk001", "quantity": 5}]
    assert storage.keys() == ["stockItems"]


@pytest.mark.unit
def test_file_storage_corrupt_file_reads_as_absent(file_store):
    path = file_store.storage.root / "dailyTasks.json"
    path.write_bytes(b"\xff\xfe not utf-8")

    assert file_store.read("dailyTasks") is None


@pytest.mark.unit
def test_file_storage_rejects_path_like_keys(file_store):
    with pytest.raises(RecordStoreError):
        file_store.write("../escape", [])

    assert file_store.read("../escape") is None


@pytest.mark.unit
def test_file_storage_remove_missing_key(file_store):
    file_store.remove("manuals")

    assert file_store.read("manuals") is None


@pytest.mark.unit
def test_memory_storage_is_shared_between_handles():
    storage = MemoryStorage()
    channel = StorageChannel()
    RecordStore(storage, channel).write("manuals", [{"id": "man001"}])

    assert RecordStore(storage, channel).read("manuals") == [{"id": "man001"}]


@pytest.mark.unit
def test_default_store_uses_data_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("EQUIPCARE_DATA_DIR", str(tmp_path))
    close_record_store()
    try:
        store = get_record_store()
        assert isinstance(store.storage, FileStorage)
        assert get_record_store() is store
    finally:
        close_record_store()


@pytest.mark.unit
def test_default_store_in_memory(monkeypatch):
    monkeypatch.delenv("EQUIPCARE_DATA_DIR", raising=False)
    close_record_store()
    try:
        assert isinstance(get_record_store().storage, MemoryStorage)
    finally:
        close_record_store()
