"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.pop("EQUIPCARE_DATA_DIR", None)
os.environ.pop("EQUIPCARE_LOG_RETENTION", None)

from equipcare.services.record_store import (  # noqa: E402
    FileStorage,
    MemoryStorage,
    RecordStore,
    StorageChannel,
    close_record_store,
)


@pytest.fixture
def store():
    """Fresh in-memory store (one context)."""
    return RecordStore(storage=MemoryStorage(), channel=StorageChannel(), context_id="ctx_main")


@pytest.fixture
def other_tab(store):
    """Second context over the same storage and channel."""
    return store.open_context("ctx_other")


@pytest.fixture
def file_store(tmp_path):
    """Store backed by a temporary data directory."""
    return RecordStore(storage=FileStorage(tmp_path / "data"), context_id="ctx_file")


@pytest.fixture
def default_store(monkeypatch, store):
    """Install ``store`` as the process-wide record store used by the HTTP handlers."""
    import equipcare.services.record_store as record_store_module

    monkeypatch.setattr(record_store_module, "_store", store)
    yield store
    close_record_store()


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time

