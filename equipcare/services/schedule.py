"""Machine maintenance schedule: editor and dated listing."""

from typing import Optional

from equipcare.models.schedule import SCHEDULE_KEY, ScheduledMachineTask, ScheduleForm, ScheduleStatus
from equipcare.models.task import Priority
from equipcare.services.collections import Notice, RecordCollection
from equipcare.services.pdf_export import render_schedule_pdf
from equipcare.services.record_store import RecordStore
from equipcare.services.viewers import RecordBoard
from equipcare.utils.dates import sort_by_date

SCHEDULE_PATH = "/dashboard/schedule"


class ScheduleEditor(RecordCollection[ScheduledMachineTask]):
    key = SCHEDULE_KEY
    model_cls = ScheduledMachineTask
    form_cls = ScheduleForm
    id_prefix = "smt"
    label = "Schedule Task"
    listing_path = SCHEDULE_PATH

    def build(self, form: ScheduleForm, record_id: str,
              previous: Optional[ScheduledMachineTask]) -> ScheduledMachineTask:
        return ScheduledMachineTask(
            id=record_id,
            machine_name=form.machine_name,
            task_name=form.task_name,
            scheduled_date=form.scheduled_date,
            assigned_to=form.assigned_to,
            priority=form.priority or Priority.MEDIUM,
            status=form.status or ScheduleStatus.SCHEDULED,
            notes=form.notes,
        )

    def display_name(self, item: ScheduledMachineTask) -> str:
        return f"{item.task_name} for {item.machine_name}"


class ScheduleView(RecordBoard[ScheduledMachineTask]):
    """Scheduled tasks ordered by ``scheduledDate``. Starts empty (no starter records)."""

    def __init__(self, store: RecordStore):
        super().__init__(store, ScheduleEditor(store))

    def load(self) -> list[ScheduledMachineTask]:
        return sort_by_date(super().load(), lambda task: task.scheduled_date)

    def deleted_notice(self, removed: dict) -> Notice:
        return Notice(
            title="Task Deleted",
            description=f'Scheduled task "{removed.get("taskName", removed.get("id"))}" has been deleted.',
            variant="destructive"
        )

    def export_pdf(self) -> bytes:
        return render_schedule_pdf(self.items)
