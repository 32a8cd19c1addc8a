"""Mounted views that stay current with the record store."""

from typing import Any, Callable, Generic, Optional, TypeVar

from equipcare.services.collections import Notice, RecordCollection, parse_records, read_or_seed
from equipcare.services.record_store import RecordStore, StorageEvent
from equipcare.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

ItemT = TypeVar("ItemT")


class CollectionViewer:
    """
    Base view over one or more collections.

    ``mount`` loads and subscribes to ``watched_keys``; every notification
    from another context triggers a full reload; ``unmount`` drops all
    subscriptions. Also usable as a context manager.
    """

    watched_keys: tuple[str, ...] = ()

    def __init__(self, store: RecordStore):
        self.store = store
        self.items: list[Any] = []
        self.notices: list[Notice] = []
        self._unsubscribers: list[Callable[[], None]] = []
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    def load(self) -> list[Any]:
        raise NotImplementedError

    def reload(self) -> list[Any]:
        self.items = self.load()
        return self.items

    def mount(self) -> "CollectionViewer":
        if self.mounted:
            return self
        self.reload()
        for key in self.watched_keys:
            self._unsubscribers.append(self.store.subscribe(key, self._on_storage_event))
        self._mounted = True
        logger.debug(
            "View mounted",
            view=type(self).__name__,
            watched_keys=list(self.watched_keys),
            item_count=len(self.items)
        )
        return self

    def unmount(self) -> None:
        while self._unsubscribers:
            self._unsubscribers.pop()()
        self._mounted = False
        logger.debug("View unmounted", view=type(self).__name__)

    def notify(self, notice: Notice) -> Notice:
        self.notices.append(notice)
        return notice

    def _on_storage_event(self, event: StorageEvent) -> None:
        logger.debug(
            "Reloading view after storage event",
            view=type(self).__name__,
            storage_key=event.key,
            context_id=self.store.context_id
        )
        self.reload()

    def __enter__(self):
        return self.mount()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unmount()
        return False


class RecordBoard(CollectionViewer, Generic[ItemT]):
    """Card/table view of a single collection with local delete."""

    def __init__(self, store: RecordStore, collection: RecordCollection):
        super().__init__(store)
        self.collection = collection
        self.watched_keys = (collection.key,)

    def load(self) -> list[ItemT]:
        records = read_or_seed(self.store, self.collection.key)
        return parse_records(self.collection.model_cls, records, self.collection.key)

    def find(self, record_id: str) -> Optional[ItemT]:
        return next((item for item in self.items if item.id == record_id), None)

    def deleted_notice(self, removed: dict) -> Notice:
        return Notice(
            title=f"{self.collection.label} Deleted",
            description=f"The {self.collection.label.lower()} has been successfully deleted.",
            variant="destructive"
        )

    def delete(self, record_id: str) -> Notice:
        """Delete from the view and the store; raises RecordNotFoundError for unknown ids."""
        removed = self.collection.delete(record_id)
        self.items = [item for item in self.items if item.id != record_id]
        return self.notify(self.deleted_notice(removed))
