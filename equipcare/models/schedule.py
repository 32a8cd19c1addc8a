"""Machine maintenance schedule models."""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from equipcare.models.task import Priority
from equipcare.utils.dates import today_iso

SCHEDULE_KEY = "scheduledMachineTasks"


class ScheduleStatus(str, Enum):
    """Status of a scheduled machine task."""
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    OVERDUE = "Overdue"


class ScheduledMachineTask(BaseModel):
    """A dated maintenance job for one machine."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Record ID (smt...)")
    machine_name: str = Field(..., alias="machineName", description="Machine name")
    task_name: str = Field(..., alias="taskName", description="Task name")
    scheduled_date: str = Field(..., alias="scheduledDate", description="Scheduled date")
    assigned_to: Optional[str] = Field(None, alias="assignedTo")
    priority: Priority = Field(default=Priority.MEDIUM)
    status: ScheduleStatus = Field(default=ScheduleStatus.SCHEDULED)
    notes: Optional[str] = None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScheduleForm(BaseModel):
    """Create/edit form for a scheduled machine task."""
    model_config = ConfigDict(populate_by_name=True)

    machine_name: str = Field(..., alias="machineName")
    task_name: str = Field(..., alias="taskName")
    scheduled_date: str = Field(default_factory=today_iso, alias="scheduledDate")
    assigned_to: Optional[str] = Field(None, alias="assignedTo")
    priority: Optional[Priority] = Field(default=Priority.MEDIUM)
    status: Optional[ScheduleStatus] = Field(default=ScheduleStatus.SCHEDULED)
    notes: Optional[str] = None

    @field_validator("machine_name")
    @classmethod
    def _machine_name_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Machine name is required.")
        return value

    @field_validator("task_name")
    @classmethod
    def _task_name_length(cls, value: str) -> str:
        if len(value.strip()) < 3:
            raise ValueError("Task name must be at least 3 characters.")
        return value

    @field_validator("scheduled_date")
    @classmethod
    def _scheduled_date_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Scheduled date is required.")
        return value

    @field_validator("assigned_to", "notes")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None
