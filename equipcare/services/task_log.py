"""
Aggregate maintenance task log.

Every task saved on a cadence board is mirrored here with the cadence it was
saved under. The log is a persisted history: whether deleting a task from its
board also removes the mirror is governed by ``LogRetention``.
"""

import os
from enum import Enum
from typing import Iterable, Optional

from equipcare.models.task import (
    CADENCE_COLLECTION_KEYS,
    TASK_LOG_KEY,
    Cadence,
    LoggedTask,
    MaintenanceTask,
)
from equipcare.services.collections import parse_records, remove_record, upsert_record
from equipcare.services.pdf_export import render_task_log_pdf
from equipcare.services.record_store import RecordStore
from equipcare.services.viewers import CollectionViewer
from equipcare.utils.dates import sort_by_date
from equipcare.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class LogRetention(str, Enum):
    """What happens to a log entry when its task is deleted from a board."""
    RETAIN = "retain"
    CASCADE = "cascade"


def default_log_retention() -> LogRetention:
    """Retention policy from EQUIPCARE_LOG_RETENTION (``retain`` when unset or unknown)."""
    raw = os.environ.get("EQUIPCARE_LOG_RETENTION", LogRetention.RETAIN.value).strip().lower()
    try:
        return LogRetention(raw)
    except ValueError:
        logger.warning("Unknown log retention policy, using retain", configured_value=raw)
        return LogRetention.RETAIN


def sort_tasks_by_due_date(tasks: Iterable[MaintenanceTask]) -> list:
    return sort_by_date(tasks, lambda task: task.due_date)


class TaskLog:
    """Read/write access to the ``allMaintenanceTasksLog`` collection."""

    key = TASK_LOG_KEY

    def __init__(self, store: RecordStore):
        self.store = store

    def records(self) -> list[dict]:
        return self.store.read(self.key) or []

    def entries(self) -> list[LoggedTask]:
        return parse_records(LoggedTask, self.records(), self.key)

    def get(self, task_id: str) -> Optional[LoggedTask]:
        return next((entry for entry in self.entries() if entry.id == task_id), None)

    def upsert(self, task: MaintenanceTask, cadence: Cadence) -> LoggedTask:
        """Mirror ``task`` into the log, tagged with ``cadence``."""
        entry = LoggedTask.from_task(task, cadence)
        records, _ = upsert_record(self.records(), entry.to_record())
        self.store.write(self.key, records)
        return entry

    def remove(self, task_id: str) -> bool:
        records, removed = remove_record(self.records(), task_id)
        if removed is None:
            return False
        self.store.write(self.key, records)
        return True

    def reconcile(self, retention: Optional[LogRetention] = None) -> int:
        """
        Read-repair the log against the three cadence collections.

        Upserts an entry for every task currently on a board and, under the
        cascade policy, drops entries whose task no longer exists. Writes
        only when something changed.

        Returns:
            Number of entries added, updated or dropped
        """
        retention = retention or default_log_retention()
        records = self.records()
        owners: dict[str, Cadence] = {}
        changed = 0

        for cadence in Cadence:
            key = cadence.collection_key
            for task in parse_records(MaintenanceTask, self.store.read(key) or [], key):
                if task.id in owners:
                    # First cadence (daily, weekly, monthly) owns a duplicated id.
                    logger.warning(
                        "Task id present on more than one board; keeping first",
                        record_id=task.id,
                        kept_cadence=owners[task.id].value,
                        skipped_cadence=cadence.value
                    )
                    continue
                owners[task.id] = cadence
                expected = LoggedTask.from_task(task, cadence).to_record()
                current = next((r for r in records if r.get("id") == task.id), None)
                if current != expected:
                    records, _ = upsert_record(records, expected)
                    changed += 1

        if retention is LogRetention.CASCADE:
            kept = [r for r in records if r.get("id") in owners]
            changed += len(records) - len(kept)
            records = kept

        if changed:
            self.store.write(self.key, records)
            logger.info(
                "Task log reconciled",
                changed_entries=changed,
                retention=retention.value,
                context_id=self.store.context_id
            )
        return changed


class TaskLogView(CollectionViewer):
    """
    Read-only aggregate view sorted by due date.

    Reloads on changes to the log and to any cadence collection. With
    ``repair_on_load`` every load first runs ``TaskLog.reconcile``.
    """

    watched_keys = (TASK_LOG_KEY, *CADENCE_COLLECTION_KEYS)

    def __init__(self, store: RecordStore, repair_on_load: bool = False,
                 retention: Optional[LogRetention] = None):
        super().__init__(store)
        self.task_log = TaskLog(store)
        self.repair_on_load = repair_on_load
        self.retention = retention

    def load(self) -> list[LoggedTask]:
        if self.repair_on_load:
            self.task_log.reconcile(self.retention)
        return sort_tasks_by_due_date(self.task_log.entries())

    def export_pdf(self) -> bytes:
        return render_task_log_pdf(self.items)
