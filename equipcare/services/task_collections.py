"""Daily / weekly / monthly task boards and their editor."""

from typing import Optional

from equipcare.models.task import Cadence, MaintenanceTask, Priority, TaskForm, TaskStatus
from equipcare.services.collections import Notice, RecordCollection
from equipcare.services.record_store import RecordStore
from equipcare.services.task_log import LogRetention, TaskLog, default_log_retention
from equipcare.services.viewers import RecordBoard
from equipcare.utils.logging import get_structured_logger, preview_text

logger = get_structured_logger(__name__)


class TaskCollection(RecordCollection[MaintenanceTask]):
    """
    Editor for one cadence collection.

    Every save is written twice: to the cadence collection, then to the
    aggregate log tagged with this cadence. Deletes only touch the log
    under ``LogRetention.CASCADE``.
    """

    model_cls = MaintenanceTask
    form_cls = TaskForm

    def __init__(self, store: RecordStore, cadence: Cadence, retention: Optional[LogRetention] = None):
        super().__init__(store)
        self.cadence = cadence
        self.retention = retention or default_log_retention()
        self.task_log = TaskLog(store)

    @property
    def key(self) -> str:
        return self.cadence.collection_key

    @property
    def id_prefix(self) -> str:
        return self.cadence.id_prefix

    @property
    def label(self) -> str:
        return f"{self.cadence.value} Task"

    @property
    def listing_path(self) -> str:
        return self.cadence.listing_path

    def build(self, form: TaskForm, record_id: str, previous: Optional[MaintenanceTask]) -> MaintenanceTask:
        status = form.status or (previous.status if previous else None) or TaskStatus.PENDING
        image_url = form.image_url or (previous.image_url if previous else None)
        return MaintenanceTask(
            id=record_id,
            task_name=form.task_name,
            machine_id=form.machine_id,
            due_date=form.due_date,
            status=status,
            assigned_to=form.assigned_to,
            priority=form.priority or Priority.MEDIUM,
            description=form.description,
            image_url=image_url,
        )

    def display_name(self, item: MaintenanceTask) -> str:
        return item.task_name

    def after_save(self, item: MaintenanceTask) -> None:
        self.task_log.upsert(item, self.cadence)
        logger.debug(
            "Task mirrored to log",
            record_id=item.id,
            cadence=self.cadence.value,
            task_status=item.status.value,
            description_preview=preview_text(item.description)
        )

    def after_delete(self, record_id: str) -> None:
        if self.retention is LogRetention.CASCADE:
            removed = self.task_log.remove(record_id)
            logger.debug(
                "Cascaded task delete to log",
                record_id=record_id,
                cadence=self.cadence.value,
                log_entry_removed=removed
            )


class CadenceBoard(RecordBoard[MaintenanceTask]):
    """Listing of one cadence's tasks, seeded with starter tasks on first use."""

    def __init__(self, store: RecordStore, cadence: Cadence, retention: Optional[LogRetention] = None):
        super().__init__(store, TaskCollection(store, cadence, retention))
        self.cadence = cadence

    @property
    def add_path(self) -> str:
        return f"{self.cadence.listing_path}/add"

    def edit_path(self, task_id: str) -> str:
        return f"{self.cadence.listing_path}/edit/{task_id}"

    def deleted_notice(self, removed: dict) -> Notice:
        return Notice(
            title="Task Deleted",
            description=f'The task "{removed.get("taskName", removed.get("id"))}" has been successfully deleted.',
            variant="destructive"
        )
