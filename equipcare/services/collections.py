"""Generic record collections: read, upsert-by-id save, delete."""

from typing import Any, Generic, Literal, Mapping, Optional, Type, TypeVar
from pydantic import BaseModel, Field, ValidationError

from equipcare.services.record_store import RecordStore
from equipcare.services.seeds import seed_records
from equipcare.utils.errors import RecordNotFoundError
from equipcare.utils.ids import generate_record_id
from equipcare.utils.logging import get_structured_logger
from equipcare.utils.validation import parse_form

logger = get_structured_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Notice(BaseModel):
    """Toast-style user feedback."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class SaveResult(BaseModel):
    """Outcome of an editor submit."""
    record: Any = Field(..., description="The saved model instance")
    created: bool = Field(..., description="False when an existing record was replaced")
    redirect_to: str = Field(..., description="Listing view to return to")
    notice: Notice


def upsert_record(records: list[dict], record: dict) -> tuple[list[dict], bool]:
    """Replace the entry with the same id in place, else append. Returns (records, replaced)."""
    updated = []
    replaced = False
    for existing in records:
        if not replaced and existing.get("id") == record["id"]:
            updated.append(record)
            replaced = True
        else:
            updated.append(existing)
    if not replaced:
        updated.append(record)
    return updated, replaced


def remove_record(records: list[dict], record_id: str) -> tuple[list[dict], Optional[dict]]:
    """Drop every entry with ``record_id``. Returns (records, first removed entry or None)."""
    removed = None
    kept = []
    for existing in records:
        if existing.get("id") == record_id:
            removed = removed or existing
        else:
            kept.append(existing)
    return kept, removed


def parse_records(model_cls: Type[ModelT], records: list[dict], key: str) -> list[ModelT]:
    """Validate stored records, skipping (and logging) malformed entries."""
    items = []
    for index, record in enumerate(records):
        try:
            items.append(model_cls.model_validate(record))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed stored record",
                storage_key=key,
                record_index=index,
                record_id=record.get("id"),
                error_count=e.error_count()
            )
    return items


def read_or_seed(store: RecordStore, key: str) -> list[dict]:
    """
    Read a collection, initializing it on first use.

    An absent (or unreadable) collection is replaced by its starter records,
    which are persisted so later reads find an initialized collection.
    Collections without starter records simply read as empty.
    """
    records = store.read(key)
    if records is not None:
        return records

    records = seed_records(key)
    if records:
        store.write(key, records)
        logger.info(
            "Collection seeded with starter records",
            storage_key=key,
            record_count=len(records),
            context_id=store.context_id
        )
    return records


class RecordCollection(Generic[ModelT]):
    """
    One named collection edited through a validated form.

    Subclasses provide the key, models and ``build``; ``after_save`` and
    ``after_delete`` hook in follow-up writes to other collections.
    """

    key: str
    model_cls: Type[ModelT]
    form_cls: Type[BaseModel]
    id_prefix: str
    label: str
    listing_path: str

    def __init__(self, store: RecordStore):
        self.store = store

    def records(self) -> list[dict]:
        return self.store.read(self.key) or []

    def items(self) -> list[ModelT]:
        return parse_records(self.model_cls, self.records(), self.key)

    def get(self, record_id: str) -> Optional[ModelT]:
        return next((item for item in self.items() if item.id == record_id), None)

    def build(self, form: Any, record_id: str, previous: Optional[ModelT]) -> ModelT:
        raise NotImplementedError

    def display_name(self, item: ModelT) -> str:
        return item.id

    def after_save(self, item: ModelT) -> None:
        pass

    def after_delete(self, record_id: str) -> None:
        pass

    def save(self, form_data: Mapping[str, Any], existing_id: Optional[str] = None) -> SaveResult:
        """
        Validate ``form_data`` and upsert it.

        Raises FormValidationError before anything is written, and
        RecordNotFoundError when ``existing_id`` is not in this collection.
        """
        form = parse_form(self.form_cls, form_data)

        records = self.records()
        previous = None
        if existing_id:
            if not any(r.get("id") == existing_id for r in records):
                raise RecordNotFoundError(self.key, existing_id)
            previous = next(
                (item for item in parse_records(self.model_cls, records, self.key) if item.id == existing_id),
                None
            )
        record_id = existing_id or generate_record_id(self.id_prefix, {r.get("id") for r in records})

        item = self.build(form, record_id, previous)
        records, replaced = upsert_record(records, item.to_record())
        self.store.write(self.key, records)
        self.after_save(item)

        logger.info(
            "Record saved",
            storage_key=self.key,
            record_id=record_id,
            is_new=not replaced,
            context_id=self.store.context_id
        )

        name = self.display_name(item)
        if replaced:
            notice = Notice(title=f"{self.label} Updated", description=f"{name} has been updated.")
        else:
            notice = Notice(title=f"{self.label} Created", description=f"{name} has been added successfully.")
        return SaveResult(record=item, created=not replaced, redirect_to=self.listing_path, notice=notice)

    def delete(self, record_id: str) -> dict:
        """Remove a record by id; returns the removed stored entry."""
        records, removed = remove_record(self.records(), record_id)
        if removed is None:
            raise RecordNotFoundError(self.key, record_id)

        self.store.write(self.key, records)
        self.after_delete(record_id)

        logger.info(
            "Record deleted",
            storage_key=self.key,
            record_id=record_id,
            context_id=self.store.context_id
        )
        return removed
