"""Maintenance task models."""

from enum import Enum
from typing import Optional, Any
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

TASK_LOG_KEY = "allMaintenanceTasksLog"


class TaskStatus(str, Enum):
    """Task lifecycle status."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class Priority(str, Enum):
    """Task priority."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


_CADENCE_KEYS = {
    "Daily": "dailyTasks",
    "Weekly": "weeklyTasks",
    "Monthly": "monthlyTasks",
}

_CADENCE_ID_PREFIXES = {
    "Daily": "dt",
    "Weekly": "wt",
    "Monthly": "mt",
}


class Cadence(str, Enum):
    """How often a task recurs; selects the collection it lives in."""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"

    @property
    def collection_key(self) -> str:
        return _CADENCE_KEYS[self.value]

    @property
    def id_prefix(self) -> str:
        return _CADENCE_ID_PREFIXES[self.value]

    @property
    def slug(self) -> str:
        return self.value.lower()

    @property
    def listing_path(self) -> str:
        return f"/dashboard/maintenance/{self.slug}"

    @classmethod
    def parse(cls, raw: str) -> "Cadence":
        """Accept either the display value ("Daily") or the slug ("daily")."""
        for cadence in cls:
            if raw in (cadence.value, cadence.slug):
                return cadence
        raise ValueError(f"Unknown cadence: {raw!r}")


CADENCE_COLLECTION_KEYS = tuple(_CADENCE_KEYS.values())


class MaintenanceTask(BaseModel):
    """A task on one of the daily/weekly/monthly boards."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Record ID, unique within its collection")
    task_name: str = Field(..., alias="taskName", min_length=1, description="Task name")
    machine_id: str = Field(..., alias="machineId", min_length=1, description="Machine identifier")
    due_date: str = Field(..., alias="dueDate", description="Due date (free-form, e.g. 2024-09-01 or Today)")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    assigned_to: Optional[str] = Field(None, alias="assignedTo", description="Assignee name")
    priority: Optional[Priority] = Field(None, description="Priority")
    description: Optional[str] = Field(None, description="Instructions or notes")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Image URL or data URI")

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "MaintenanceTask":
        return cls.model_validate(record)


class LoggedTask(MaintenanceTask):
    """Aggregate log entry: a task plus the cadence it was copied from."""
    cadence: Cadence = Field(
        ...,
        validation_alias=AliasChoices("cadence", "type"),
        description="Cadence of the source collection at write time"
    )

    @classmethod
    def from_task(cls, task: MaintenanceTask, cadence: Cadence) -> "LoggedTask":
        return cls.model_validate({**task.to_record(), "cadence": cadence.value})

    def to_task(self) -> MaintenanceTask:
        return MaintenanceTask.model_validate(self.model_dump(exclude={"cadence"}))


class TaskForm(BaseModel):
    """Create/edit form for a maintenance task."""
    model_config = ConfigDict(populate_by_name=True)

    task_name: str = Field(..., alias="taskName", description="Task name (min 3 characters)")
    machine_id: str = Field(..., alias="machineId", description="Machine ID")
    due_date: str = Field(..., alias="dueDate", description="Due date")
    assigned_to: Optional[str] = Field(None, alias="assignedTo")
    priority: Optional[Priority] = Field(default=Priority.MEDIUM)
    description: Optional[str] = None
    status: Optional[TaskStatus] = Field(None, description="Left unset to keep the stored status")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    @field_validator("task_name")
    @classmethod
    def _task_name_length(cls, value: str) -> str:
        if len(value.strip()) < 3:
            raise ValueError("Task name must be at least 3 characters.")
        return value

    @field_validator("machine_id")
    @classmethod
    def _machine_id_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Machine ID is required.")
        return value

    @field_validator("due_date")
    @classmethod
    def _due_date_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Due date is required.")
        return value

    @field_validator("assigned_to", "description", "image_url")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None
