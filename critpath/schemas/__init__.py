from critpath.schemas.task import Task, TaskStatus
from critpath.schemas.dependency import DependencyEdge, DependencyType
from critpath.schemas.timeline import Timeline, TimelineBar, TimelineLink
from critpath.schemas.schedule import (
    ScheduleRequest,
    TimelineRequest,
    SimulationRequest,
    DurationChangeIn,
    CycleCheckRequest,
    CycleCheckRead,
    TaskTimingRead,
    ScheduleRead,
    TaskImpactRead,
    SimulationRead,
)

__all__ = [
    "Task",
    "TaskStatus",
    "DependencyEdge",
    "DependencyType",
    "Timeline",
    "TimelineBar",
    "TimelineLink",
    "ScheduleRequest",
    "TimelineRequest",
    "SimulationRequest",
    "DurationChangeIn",
    "CycleCheckRequest",
    "CycleCheckRead",
    "TaskTimingRead",
    "ScheduleRead",
    "TaskImpactRead",
    "SimulationRead",
]
