from datetime import date

from pydantic import BaseModel, ConfigDict, Field, computed_field

from critpath.schemas.dependency import DependencyEdge
from critpath.schemas.task import Task


class ScheduleRequest(BaseModel):
    """Task and dependency snapshot to analyze."""
    tasks: list[Task]
    dependencies: list[DependencyEdge] = []

    model_config = ConfigDict(coerce_numbers_to_str=True)


class TimelineRequest(ScheduleRequest):
    """Snapshot to project onto a timeline."""
    critical_path_task_ids: list[str] | None = None  # Skip analysis when given
    reference_date: date | None = None  # Anchor for undated tasks
    progress_overrides: dict[str, float] | None = None


class DurationChangeIn(BaseModel):
    """A hypothetical duration for one task."""
    task_id: str
    duration_days: int = Field(ge=1)

    model_config = ConfigDict(coerce_numbers_to_str=True)


class SimulationRequest(ScheduleRequest):
    changes: list[DurationChangeIn]


class CycleCheckRequest(ScheduleRequest):
    """Would adding blocker -> dependent close a cycle?"""
    blocker_task_id: str
    dependent_task_id: str


class CycleCheckRead(BaseModel):
    would_create_cycle: bool


class TaskTimingRead(BaseModel):
    """Timing of one task, in days from project start."""
    task_id: str
    duration_days: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    total_slack: int
    is_critical: bool

    model_config = ConfigDict(from_attributes=True)


class ScheduleRead(BaseModel):
    """Result of a CPM analysis."""
    project_duration: int
    critical_path: list[str]
    tasks: list[TaskTimingRead]

    @computed_field
    @property
    def critical_task_count(self) -> int:
        return len(self.critical_path)


class TaskImpactRead(BaseModel):
    task_id: str
    title: str
    original_finish: int
    simulated_finish: int
    delta_days: int

    model_config = ConfigDict(from_attributes=True)


class SimulationRead(BaseModel):
    """Original vs simulated schedule."""
    original_duration: int
    simulated_duration: int
    impact_days: int
    original_critical_path: list[str]
    simulated_critical_path: list[str]
    affected_tasks: list[TaskImpactRead]
    total_tasks: int

    model_config = ConfigDict(from_attributes=True)
