"""
Timeline projection.

Turns tasks, dependencies and the critical path into bars and links for a
Gantt-style view. The projection carries data only; colors and layout are
left to the rendering layer.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta

from critpath.schemas import DependencyEdge, Task, TaskStatus, Timeline, TimelineBar, TimelineLink
from critpath.services.critical_path import analyze_schedule
from critpath.services.duration import DEFAULT_HOURS_PER_DAY, estimate_duration
from critpath.services.graph import accepted_edges, unique_tasks
from critpath.logging_config import get_logger

logger = get_logger(__name__)

STATUS_PROGRESS = {
    TaskStatus.NEW: 0.0,
    TaskStatus.IN_PROGRESS: 0.5,
    TaskStatus.REVIEW: 0.75,
    TaskStatus.DONE: 1.0,
    TaskStatus.BLOCKED: 0.0,
}


def progress_for(task: Task, overrides: Mapping[str, float] | None = None) -> float:
    """Completion ratio from an explicit override, else from status."""
    if overrides and task.id in overrides:
        return min(1.0, max(0.0, float(overrides[task.id])))
    return STATUS_PROGRESS.get(task.status, 0.0)


def bar_dates(task: Task, duration_days: int, reference_date: date) -> tuple[date, date]:
    """
    Date range for a task's bar.

    Uses the task's own dates where present; missing ends are filled in
    from the estimated duration, anchored on ``reference_date`` when the
    task has no dates at all. A due date on or before the start day is
    replaced so the bar always spans at least one day.
    """
    span = timedelta(days=duration_days)
    start = task.start_at.date() if task.start_at else None
    end = task.due_at.date() if task.due_at else None

    if start is not None:
        if end is None or end <= start:
            end = start + span
    elif end is not None:
        start = end - span
    else:
        start = reference_date
        end = start + span

    return start, end


def project_timeline(
    tasks: Sequence[Task],
    edges: Iterable[DependencyEdge],
    critical_path_ids: Sequence[str] | None = None,
    *,
    reference_date: date | None = None,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
    progress_overrides: Mapping[str, float] | None = None,
) -> Timeline:
    """
    Map tasks and dependencies onto timeline bars and links.

    Args:
        tasks: Task snapshot, projected in input order (repeated ids keep
            the first record)
        edges: Dependency snapshot; only accepted ``blocks`` edges become links
        critical_path_ids: Precomputed critical path. When omitted the
            schedule is analyzed here (and may raise CyclicDependencyError).
        reference_date: Anchor for tasks without dates. Defaults to today,
            so undated bars move between calls made on different days;
            pass a fixed date for reproducible output.
        hours_per_day: Effort-to-days conversion for duration estimates
        progress_overrides: Completion ratios that replace the status mapping

    Returns:
        Timeline with the critical path, one bar per task and one link per
        accepted edge
    """
    edges = list(edges)
    if critical_path_ids is None:
        critical_path_ids = analyze_schedule(tasks, edges, hours_per_day).critical_path
    critical = set(critical_path_ids)
    anchor = reference_date or date.today()

    bars = []
    for task in unique_tasks(tasks):
        duration = estimate_duration(task, hours_per_day)
        start, end = bar_dates(task, duration, anchor)
        bars.append(TimelineBar(
            id=task.id,
            label=task.title,
            start_date=start,
            end_date=end,
            duration_days=duration,
            progress_ratio=progress_for(task, progress_overrides),
            parent_id=task.parent_id,
            is_critical=task.id in critical,
        ))

    links = [
        TimelineLink(
            id=edge.id,
            source_task_id=edge.blocker_task_id,
            target_task_id=edge.dependent_task_id,
            is_critical=edge.blocker_task_id in critical and edge.dependent_task_id in critical,
        )
        for edge in accepted_edges(tasks, edges)
    ]

    logger.debug(f"Projected timeline: {len(bars)} bars, {len(links)} links")

    return Timeline(critical_path=list(critical_path_ids), bars=bars, links=links)


def build_timeline(
    tasks: Sequence[Task],
    edges: Iterable[DependencyEdge],
    *,
    reference_date: date | None = None,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
    progress_overrides: Mapping[str, float] | None = None,
) -> Timeline:
    """Analyze the schedule and project it in one call."""
    edges = list(edges)
    schedule = analyze_schedule(tasks, edges, hours_per_day)
    return project_timeline(
        tasks,
        edges,
        schedule.critical_path,
        reference_date=reference_date,
        hours_per_day=hours_per_day,
        progress_overrides=progress_overrides,
    )
