"""
Critpath - task-dependency scheduling engine.

Computes earliest/latest times and the critical path for a set of tasks
linked by finish-to-start "blocks" dependencies, and projects the result
onto timeline bars and links.
"""

__version__ = "0.1.0"

from critpath.exceptions import CritpathException, CyclicDependencyError
from critpath.schemas import DependencyEdge, Task, TaskStatus, Timeline, TimelineBar, TimelineLink
from critpath.services.critical_path import (
    ProjectSchedule,
    TaskTiming,
    analyze_schedule,
    calculate_critical_path,
)
from critpath.services.duration import estimate_duration
from critpath.services.projector import build_timeline, project_timeline

__all__ = [
    "__version__",
    "CritpathException",
    "CyclicDependencyError",
    "DependencyEdge",
    "Task",
    "TaskStatus",
    "Timeline",
    "TimelineBar",
    "TimelineLink",
    "ProjectSchedule",
    "TaskTiming",
    "analyze_schedule",
    "calculate_critical_path",
    "estimate_duration",
    "build_timeline",
    "project_timeline",
]
