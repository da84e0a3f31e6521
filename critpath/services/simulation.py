"""
What-If Simulation Service.

Lets callers try hypothetical duration changes and see the ripple effect on
the project schedule without touching the task snapshot.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from critpath.schemas import DependencyEdge, Task
from critpath.services.critical_path import analyze_graph
from critpath.services.duration import DEFAULT_HOURS_PER_DAY
from critpath.services.graph import build_dependency_graph
from critpath.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DurationChange:
    """A hypothetical new duration for a task."""
    task_id: str
    duration_days: int


@dataclass(frozen=True)
class TaskImpact:
    """The impact of the simulation on a single task."""
    task_id: str
    title: str
    original_finish: int
    simulated_finish: int
    delta_days: int  # Positive = delayed, negative = earlier


@dataclass(frozen=True)
class SimulationResult:
    """Complete result of a what-if simulation."""
    original_duration: int
    simulated_duration: int
    impact_days: int  # How many days the project end moved
    original_critical_path: list[str]
    simulated_critical_path: list[str]
    affected_tasks: list[TaskImpact]
    total_tasks: int


def simulate_duration_changes(
    tasks: Sequence[Task],
    edges: Iterable[DependencyEdge],
    changes: Iterable[DurationChange],
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> SimulationResult:
    """
    Simulate duration changes and calculate the ripple effect.

    Changes for unknown tasks are skipped. Durations below one day are
    raised to one day, matching the estimator's minimum.

    Raises:
        CyclicDependencyError: if the dependency graph has a cycle
    """
    graph = build_dependency_graph(tasks, edges, hours_per_day)
    original = analyze_graph(graph)

    # Apply hypothetical changes on a copy so the original stays intact
    simulated_graph = graph.copy()
    for change in changes:
        if change.task_id not in simulated_graph:
            logger.warning(f"Task {change.task_id} not found in snapshot, skipping")
            continue
        simulated_graph.nodes[change.task_id]["duration_days"] = max(1, change.duration_days)

    simulated = analyze_graph(simulated_graph)

    # Build impact list (only tasks whose finish moved)
    affected_tasks = []
    for task_id, before in original.timings.items():
        after = simulated.timings[task_id]
        delta = after.earliest_finish - before.earliest_finish
        if delta != 0:
            affected_tasks.append(TaskImpact(
                task_id=task_id,
                title=graph.nodes[task_id]["task"].title,
                original_finish=before.earliest_finish,
                simulated_finish=after.earliest_finish,
                delta_days=delta,
            ))

    logger.info(
        f"Simulation: duration {original.project_duration} -> {simulated.project_duration} days, "
        f"{len(affected_tasks)} tasks affected"
    )

    return SimulationResult(
        original_duration=original.project_duration,
        simulated_duration=simulated.project_duration,
        impact_days=simulated.project_duration - original.project_duration,
        original_critical_path=original.critical_path,
        simulated_critical_path=simulated.critical_path,
        affected_tasks=affected_tasks,
        total_tasks=graph.number_of_nodes(),
    )
