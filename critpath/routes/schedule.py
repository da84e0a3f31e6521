"""
Schedule routes for the Critpath API.

Every endpoint is a pure computation over the snapshot in the request
body; nothing is stored between calls.
"""

from fastapi import APIRouter, Depends

from critpath.config import Settings, get_settings
from critpath.exceptions import PayloadTooLargeError
from critpath.schemas import (
    CycleCheckRead,
    CycleCheckRequest,
    ScheduleRead,
    ScheduleRequest,
    SimulationRead,
    SimulationRequest,
    TaskTimingRead,
    Timeline,
    TimelineRequest,
)
from critpath.services.critical_path import analyze_schedule
from critpath.services.graph import build_dependency_graph, would_create_cycle
from critpath.services.projector import project_timeline
from critpath.services.simulation import DurationChange, simulate_duration_changes
from critpath.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _check_size(request: ScheduleRequest, settings: Settings) -> None:
    if len(request.tasks) > settings.max_tasks:
        raise PayloadTooLargeError(len(request.tasks), settings.max_tasks)


@router.post("/analyze", response_model=ScheduleRead)
async def analyze(
    request: ScheduleRequest,
    settings: Settings = Depends(get_settings),
) -> ScheduleRead:
    """
    Run the forward and backward passes and return per-task timings.

    Returns 400 with ``cycle_detected`` if the dependencies form a cycle.
    """
    _check_size(request, settings)
    logger.info(
        f"Analyzing schedule: {len(request.tasks)} tasks, "
        f"{len(request.dependencies)} dependencies"
    )

    schedule = analyze_schedule(request.tasks, request.dependencies, settings.hours_per_day)

    return ScheduleRead(
        project_duration=schedule.project_duration,
        critical_path=schedule.critical_path,
        tasks=[TaskTimingRead.model_validate(t) for t in schedule.timings.values()],
    )


@router.post("/timeline", response_model=Timeline)
async def timeline(
    request: TimelineRequest,
    settings: Settings = Depends(get_settings),
) -> Timeline:
    """
    Project tasks and dependencies onto timeline bars and links.

    If ``critical_path_task_ids`` is supplied it is used as-is; otherwise
    the critical path is computed first.
    """
    _check_size(request, settings)
    return project_timeline(
        request.tasks,
        request.dependencies,
        request.critical_path_task_ids,
        reference_date=request.reference_date,
        hours_per_day=settings.hours_per_day,
        progress_overrides=request.progress_overrides,
    )


@router.post("/simulate", response_model=SimulationRead)
async def simulate(
    request: SimulationRequest,
    settings: Settings = Depends(get_settings),
) -> SimulationRead:
    """Show how hypothetical duration changes move the project end."""
    _check_size(request, settings)
    result = simulate_duration_changes(
        request.tasks,
        request.dependencies,
        [DurationChange(task_id=c.task_id, duration_days=c.duration_days) for c in request.changes],
        settings.hours_per_day,
    )
    return SimulationRead.model_validate(result)


@router.post("/dependencies/check", response_model=CycleCheckRead)
async def check_dependency(
    request: CycleCheckRequest,
    settings: Settings = Depends(get_settings),
) -> CycleCheckRead:
    """Check whether a proposed blocks-dependency would create a cycle."""
    _check_size(request, settings)
    graph = build_dependency_graph(request.tasks, request.dependencies, settings.hours_per_day)
    result = would_create_cycle(graph, request.blocker_task_id, request.dependent_task_id)

    if result:
        logger.warning(
            f"Proposed dependency {request.blocker_task_id} -> "
            f"{request.dependent_task_id} would create a cycle"
        )

    return CycleCheckRead(would_create_cycle=result)
