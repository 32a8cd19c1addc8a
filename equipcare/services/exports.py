"""PDF downloads for the task log and the schedule."""

from equipcare.services.pdf_export import SCHEDULE_FILENAME, TASK_LOG_FILENAME
from equipcare.services.record_store import RecordStore
from equipcare.services.schedule import ScheduleView
from equipcare.services.task_log import TaskLogView
from equipcare.utils.errors import ExportError

EXPORT_VIEWS = ("log", "schedule")


def export_view_pdf(store: RecordStore, view: str) -> tuple[str, bytes]:
    """
    Render one of the exportable views as it currently reads.

    Returns:
        (download file name, PDF bytes)

    Raises:
        ExportError: if ``view`` is not one of EXPORT_VIEWS
    """
    if view == "log":
        with TaskLogView(store) as log_view:
            return TASK_LOG_FILENAME, log_view.export_pdf()
    if view == "schedule":
        with ScheduleView(store) as schedule_view:
            return SCHEDULE_FILENAME, schedule_view.export_pdf()
    raise ExportError(f"Unknown export view: {view!r} (expected one of {', '.join(EXPORT_VIEWS)})")
