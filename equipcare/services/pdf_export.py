"""
PDF export of task tables.

Rows are built from in-memory models with fixed column sets; missing optional
values print as N/A. Rendering uses a reportlab platypus table.
"""

from enum import Enum
from io import BytesIO
from typing import Any, Iterable, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from equipcare.models.schedule import ScheduledMachineTask
from equipcare.models.task import LoggedTask
from equipcare.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

MISSING = "N/A"
FONT_SIZE = 8
HEADER_FILL = colors.Color(22 / 255, 160 / 255, 133 / 255)
PAGE_MARGIN_MM = 10

TASK_LOG_TITLE = "Maintenance Task Log"
TASK_LOG_FILENAME = "maintenance_task_log.pdf"
TASK_LOG_COLUMNS = (
    ("Task Name", 40),
    ("Machine ID", 25),
    ("Type", 18),
    ("Due Date", 20),
    ("Status", 20),
    ("Priority", 18),
    ("Assigned To", 25),
)

SCHEDULE_TITLE = "Maintenance Schedule"
SCHEDULE_FILENAME = "maintenance_schedule.pdf"
SCHEDULE_COLUMNS = (
    ("Machine", 30),
    ("Task Name", 40),
    ("Scheduled Date", 22),
    ("Status", 20),
    ("Priority", 16),
    ("Assigned To", 25),
    ("Notes", 33),
)


def _cell(value: Any) -> str:
    if value is None or value == "":
        return MISSING
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_task_log_rows(entries: Iterable[LoggedTask]) -> list[list[str]]:
    return [
        [
            _cell(entry.task_name),
            _cell(entry.machine_id),
            _cell(entry.cadence),
            _cell(entry.due_date),
            _cell(entry.status),
            _cell(entry.priority),
            _cell(entry.assigned_to),
        ]
        for entry in entries
    ]


def build_schedule_rows(tasks: Iterable[ScheduledMachineTask]) -> list[list[str]]:
    return [
        [
            _cell(task.machine_name),
            _cell(task.task_name),
            _cell(task.scheduled_date),
            _cell(task.status),
            _cell(task.priority),
            _cell(task.assigned_to),
            _cell(task.notes),
        ]
        for task in tasks
    ]


def render_table_pdf(title: str, columns: Sequence[tuple[str, int]], rows: Sequence[Sequence[str]]) -> bytes:
    """
    Render a titled table to PDF bytes.

    Args:
        title: Heading printed above the table
        columns: (header, width in mm) pairs
        rows: Cell text per row, in column order

    Returns:
        The PDF document
    """
    with log_timing("render_table_pdf", logger=logger, title=title, row_count=len(rows)):
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=PAGE_MARGIN_MM * mm,
            rightMargin=PAGE_MARGIN_MM * mm,
            topMargin=PAGE_MARGIN_MM * mm,
            bottomMargin=PAGE_MARGIN_MM * mm,
            title=title,
        )

        styles = getSampleStyleSheet()
        cell_style = ParagraphStyle("TableCell", parent=styles["BodyText"], fontSize=FONT_SIZE, leading=FONT_SIZE + 2)
        header_style = ParagraphStyle(
            "TableHeader", parent=cell_style, fontName="Helvetica-Bold", textColor=colors.white
        )

        data = [[Paragraph(escape(header), header_style) for header, _ in columns]]
        data.extend([Paragraph(escape(text), cell_style) for text in row] for row in rows)

        table = Table(data, colWidths=[width * mm for _, width in columns], repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("FONTSIZE", (0, 0), (-1, -1), FONT_SIZE),
        ]))

        doc.build([Paragraph(escape(title), styles["Title"]), Spacer(1, 4 * mm), table])
        return buffer.getvalue()


def render_task_log_pdf(entries: Iterable[LoggedTask]) -> bytes:
    return render_table_pdf(TASK_LOG_TITLE, TASK_LOG_COLUMNS, build_task_log_rows(entries))


def render_schedule_pdf(tasks: Iterable[ScheduledMachineTask]) -> bytes:
    return render_table_pdf(SCHEDULE_TITLE, SCHEDULE_COLUMNS, build_schedule_rows(tasks))
