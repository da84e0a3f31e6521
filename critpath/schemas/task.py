import math
from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from critpath.logging_config import get_logger

logger = get_logger(__name__)


class TaskStatus(str, Enum):
    """Workflow status of a task."""
    NEW = "new"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"
    BLOCKED = "blocked"


class Task(BaseModel):
    """
    Snapshot of a task as supplied by the persistence layer.

    Dates, effort and status are forgiving: values that cannot be
    parsed are replaced with None (or NEW for status) so the schedule
    falls back to defaults instead of failing the whole computation.
    """
    id: str
    title: str = ""
    start_at: datetime | None = Field(default=None, alias="startAt")
    due_at: datetime | None = Field(default=None, alias="dueAt")
    estimated_effort_hours: float | None = Field(default=None, alias="estimatedEffortHours")
    status: TaskStatus = TaskStatus.NEW
    parent_id: str | None = Field(default=None, alias="parentId")  # Grouping only

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("start_at", "due_at", mode="before")
    @classmethod
    def parse_lenient_datetime(cls, value, info):
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min)
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError:
                pass
        logger.warning(f"Ignoring unparseable {info.field_name}: {value!r}")
        return None

    @field_validator("status", mode="before")
    @classmethod
    def parse_lenient_status(cls, value):
        if isinstance(value, TaskStatus):
            return value
        try:
            return TaskStatus(value)
        except (TypeError, ValueError):
            logger.warning(f"Unknown status {value!r}, treating as {TaskStatus.NEW.value}")
            return TaskStatus.NEW

    @field_validator("estimated_effort_hours", mode="before")
    @classmethod
    def parse_lenient_effort(cls, value):
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            hours = None
        else:
            try:
                hours = float(value)
            except (TypeError, ValueError):
                hours = None
        if hours is None or not math.isfinite(hours) or hours < 0:
            logger.warning(f"Ignoring invalid estimated effort: {value!r}")
            return None
        return hours
