"""
Task duration estimation.

Every task gets a whole number of days (at least 1), even when the user
left dates and effort blank.
"""

import math
from datetime import timedelta

from critpath.schemas.task import Task

DEFAULT_DURATION_DAYS = 1
DEFAULT_HOURS_PER_DAY = 8

_ONE_DAY = timedelta(days=1)


def estimate_duration(task: Task, hours_per_day: int = DEFAULT_HOURS_PER_DAY) -> int:
    """
    Estimate a task's duration in whole days.

    Order of precedence:
    1. start_at and due_at both set: ceil(|due_at - start_at|) days
    2. estimated_effort_hours set: ceil(hours / hours_per_day) days
    3. DEFAULT_DURATION_DAYS

    The result is clamped to a minimum of 1. Never raises.
    """
    if task.start_at is not None and task.due_at is not None:
        try:
            span = abs(task.due_at - task.start_at)
        except TypeError:
            # Naive and aware datetimes cannot be compared
            span = None
        if span is not None:
            return max(1, math.ceil(span / _ONE_DAY))

    if task.estimated_effort_hours is not None:
        return max(1, math.ceil(task.estimated_effort_hours / max(1, hours_per_day)))

    return DEFAULT_DURATION_DAYS
