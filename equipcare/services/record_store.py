"""Record store - named JSON collections with cross-context change notifications.

A store handle plays the role of one browser tab: handles that share a
storage area and a channel see each other's writes, and every handle is
notified of writes made by the *other* handles only.
"""

import json
import os
import re
import threading
import uuid
from pathlib import Path
from typing import Any, Callable, Optional, Protocol
from pydantic import BaseModel, ConfigDict, Field

from equipcare.utils.errors import RecordStoreError
from equipcare.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

StorageListener = Callable[["StorageEvent"], None]

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageEvent(BaseModel):
    """Change notification, shaped like a browser ``storage`` event."""
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., description="Collection / preference key that changed")
    new_value: Optional[str] = Field(None, alias="newValue", description="Raw stored value, None on removal")
    old_value: Optional[str] = Field(None, alias="oldValue", description="Raw value before the change")


class StorageArea(Protocol):
    """Raw string key/value area (the localStorage surface)."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryStorage:
    """Process-local storage area; shared by every handle bound to it."""

    def __init__(self):
        self._items: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._items)


class FileStorage:
    """Directory-backed storage area: one ``<key>.json`` file per key."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise RecordStoreError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self.root.glob("*.json"))


class StorageChannel:
    """In-process publish/subscribe bus for storage events, keyed by collection."""

    def __init__(self):
        self._listeners: dict[str, list[tuple[str, StorageListener]]] = {}
        self._lock = threading.Lock()

    def listen(self, context_id: str, key: str, callback: StorageListener) -> Callable[[], None]:
        """Register a listener for ``key`` owned by ``context_id``; returns an unsubscribe handle."""
        entry = (context_id, callback)
        with self._lock:
            self._listeners.setdefault(key, []).append(entry)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(key, [])
                if entry in listeners:
                    listeners.remove(entry)
                if not listeners:
                    self._listeners.pop(key, None)

        return unsubscribe

    def publish(self, sender_id: str, event: StorageEvent) -> int:
        """
        Deliver ``event`` to every listener on its key except the sender's own.

        Returns the number of listeners notified. A failing listener is logged
        and does not stop delivery to the rest.
        """
        with self._lock:
            targets = [
                callback
                for context_id, callback in self._listeners.get(event.key, [])
                if context_id != sender_id
            ]

        delivered = 0
        for callback in targets:
            try:
                callback(event)
                delivered += 1
            except Exception as e:
                logger.error(
                    "Storage listener failed",
                    storage_key=event.key,
                    sender_context=sender_id,
                    error=str(e),
                    exc_info=True
                )
        return delivered

    def listener_count(self, key: Optional[str] = None) -> int:
        with self._lock:
            if key is not None:
                return len(self._listeners.get(key, []))
            return sum(len(listeners) for listeners in self._listeners.values())


class RecordStore:
    """
    One execution context's handle on the shared storage area.

    Reads never raise: missing, unreadable or malformed data comes back as
    None so callers can fall back to seed or empty data. Writes replace the
    whole value and then notify the other contexts.
    """

    def __init__(
        self,
        storage: Optional[StorageArea] = None,
        channel: Optional[StorageChannel] = None,
        context_id: Optional[str] = None,
    ):
        self.storage = storage if storage is not None else MemoryStorage()
        self.channel = channel if channel is not None else StorageChannel()
        self.context_id = context_id or f"ctx_{uuid.uuid4().hex[:12]}"
        self.log = logger.bind(context_id=self.context_id)

    def open_context(self, context_id: Optional[str] = None) -> "RecordStore":
        """Another handle on the same storage and channel (a second tab)."""
        return RecordStore(storage=self.storage, channel=self.channel, context_id=context_id)

    # ---- raw values ----

    def get_text(self, key: str) -> Optional[str]:
        try:
            return self.storage.get_item(key)
        except (OSError, UnicodeDecodeError, RecordStoreError) as e:
            self.log.warning(
                "Failed to read storage key",
                storage_key=key,
                error=str(e)
            )
            return None

    def set_text(self, key: str, value: str) -> None:
        old_value = self.get_text(key)
        try:
            self.storage.set_item(key, value)
        except OSError as e:
            raise RecordStoreError(f"Failed to write {key}: {e}") from e
        self._broadcast(StorageEvent(key=key, new_value=value, old_value=old_value))

    def remove(self, key: str) -> None:
        old_value = self.get_text(key)
        try:
            self.storage.remove_item(key)
        except OSError as e:
            raise RecordStoreError(f"Failed to remove {key}: {e}") from e
        self._broadcast(StorageEvent(key=key, new_value=None, old_value=old_value))

    def has(self, key: str) -> bool:
        return self.get_text(key) is not None

    # ---- JSON values ----

    def read_json(self, key: str) -> Optional[Any]:
        raw = self.get_text(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            self.log.warning(
                "Stored value is not valid JSON; treating as absent",
                storage_key=key,
                error=str(e)
            )
            return None

    def write_json(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise RecordStoreError(f"Failed to serialize {key}: {e}") from e
        self.set_text(key, raw)

    # ---- collections ----

    def read(self, key: str) -> Optional[list[dict[str, Any]]]:
        """All records of a collection, or None when absent or unreadable."""
        value = self.read_json(key)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
            self.log.warning(
                "Stored collection has unexpected shape; treating as absent",
                storage_key=key,
                value_type=type(value).__name__
            )
            return None
        return value

    def write(self, key: str, records: list[dict[str, Any]]) -> None:
        """Replace a collection and notify other contexts."""
        self.write_json(key, list(records))
        self.log.debug(
            "Collection written",
            storage_key=key,
            record_count=len(records)
        )

    # ---- notifications ----

    def subscribe(self, key: str, callback: StorageListener) -> Callable[[], None]:
        """Run ``callback(event)`` whenever another context changes ``key``."""
        return self.channel.listen(self.context_id, key, callback)

    def _broadcast(self, event: StorageEvent) -> None:
        self.channel.publish(self.context_id, event)


# Global record store instance
_store: Optional[RecordStore] = None


def get_record_store() -> RecordStore:
    """Get or create the process-wide record store.

    File-backed under EQUIPCARE_DATA_DIR when set, in-memory otherwise.
    """
    global _store
    if _store is None:
        data_dir = os.environ.get("EQUIPCARE_DATA_DIR")
        storage = FileStorage(data_dir) if data_dir else MemoryStorage()
        _store = RecordStore(storage=storage)
        logger.info(
            "Record store initialized",
            backend=type(storage).__name__,
            data_dir=data_dir,
            context_id=_store.context_id
        )
    return _store


def close_record_store() -> None:
    """Drop the process-wide record store."""
    global _store
    if _store is not None:
        _store = None
        logger.info("Record store closed")
