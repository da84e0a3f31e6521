"""
Critical Path Method (CPM) implementation.

Calculates, in whole-day offsets from project start (offset 0):
- Forward pass: Earliest Start (ES), Earliest Finish (EF)
- Backward pass: Latest Start (LS), Latest Finish (LF)
- Slack/Float: LS - ES
- Critical Path: Tasks where slack = 0

Both passes use Kahn's algorithm over explicit degree counters. A pass that
cannot finalize every task means the graph has a cycle, which is reported
as CyclicDependencyError instead of producing a partial schedule.
"""

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import networkx as nx

from critpath.exceptions import CyclicDependencyError
from critpath.schemas import DependencyEdge, Task
from critpath.services.duration import DEFAULT_HOURS_PER_DAY
from critpath.services.graph import build_dependency_graph, find_cycle_edges
from critpath.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaskTiming:
    """Scheduling results for a single task."""
    task_id: str
    duration_days: int
    # Forward pass results
    earliest_start: int
    earliest_finish: int
    # Backward pass results
    latest_start: int
    latest_finish: int

    @property
    def total_slack(self) -> int:
        """Days the task can slip without delaying the project (0 = critical)."""
        return self.latest_start - self.earliest_start

    @property
    def is_critical(self) -> bool:
        return (
            self.earliest_start == self.latest_start
            and self.earliest_finish == self.latest_finish
        )


@dataclass(frozen=True)
class ProjectSchedule:
    """Complete CPM analysis for one task snapshot."""
    project_duration: int  # Max earliest finish across all tasks
    timings: dict[str, TaskTiming] = field(default_factory=dict)  # Input order
    critical_path: list[str] = field(default_factory=list)
    topological_order: list[str] = field(default_factory=list)


def _raise_cycle(graph: nx.DiGraph, unresolved: Iterable[str]) -> None:
    unresolved = list(unresolved)
    cycle = find_cycle_edges(graph, unresolved)
    logger.error(f"Cycle detected among {len(unresolved)} tasks: {sorted(unresolved)}")
    raise CyclicDependencyError(unresolved, cycle=cycle)


def forward_pass(graph: nx.DiGraph) -> tuple[dict[str, tuple[int, int]], list[str]]:
    """
    Compute earliest start/finish for every task.

    ES = max(0, max EF of predecessors), EF = ES + duration.
    Tasks are released once all their predecessors are finalized; ready
    tasks are processed FIFO, seeded in input order.

    Returns:
        ({task_id: (ES, EF)}, topological order)

    Raises:
        CyclicDependencyError: if some tasks are never released
    """
    in_degree = {node: graph.in_degree(node) for node in graph.nodes}
    ready = deque(node for node, degree in in_degree.items() if degree == 0)

    earliest: dict[str, tuple[int, int]] = {}
    order: list[str] = []

    while ready:
        task_id = ready.popleft()

        es = max((earliest[pred][1] for pred in graph.predecessors(task_id)), default=0)
        ef = es + graph.nodes[task_id]["duration_days"]
        earliest[task_id] = (es, ef)
        order.append(task_id)

        for succ in graph.successors(task_id):
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                ready.append(succ)

    if len(order) != graph.number_of_nodes():
        _raise_cycle(graph, (node for node in graph.nodes if node not in earliest))

    return earliest, order


def backward_pass(graph: nx.DiGraph, project_finish: int) -> dict[str, tuple[int, int]]:
    """
    Compute latest start/finish for every task.

    LF = min(project_finish, min LS of successors), LS = LF - duration.
    A task is finalized only after every one of its successors has been.

    Returns:
        {task_id: (LS, LF)}

    Raises:
        CyclicDependencyError: if some tasks are never released
    """
    out_degree = {node: graph.out_degree(node) for node in graph.nodes}
    ready = deque(node for node, degree in out_degree.items() if degree == 0)

    latest: dict[str, tuple[int, int]] = {}

    while ready:
        task_id = ready.popleft()

        lf = min(
            (latest[succ][0] for succ in graph.successors(task_id)),
            default=project_finish,
        )
        lf = min(lf, project_finish)
        ls = lf - graph.nodes[task_id]["duration_days"]
        latest[task_id] = (ls, lf)

        for pred in graph.predecessors(task_id):
            out_degree[pred] -= 1
            if out_degree[pred] == 0:
                ready.append(pred)

    if len(latest) != graph.number_of_nodes():
        _raise_cycle(graph, (node for node in graph.nodes if node not in latest))

    return latest


def extract_critical_path(
    graph: nx.DiGraph,
    earliest: dict[str, tuple[int, int]],
    latest: dict[str, tuple[int, int]],
) -> list[str]:
    """
    Select zero-slack tasks, ordered by earliest start then input position.
    """
    critical = [
        task_id for task_id in graph.nodes
        if earliest[task_id][0] == latest[task_id][0]
        and earliest[task_id][1] == latest[task_id][1]
    ]
    critical.sort(key=lambda task_id: (earliest[task_id][0], graph.nodes[task_id]["index"]))
    return critical


def analyze_graph(graph: nx.DiGraph) -> ProjectSchedule:
    """Run both passes over an already built graph."""
    if graph.number_of_nodes() == 0:
        return ProjectSchedule(project_duration=0)

    # =========================================================================
    # Forward Pass: ES and EF
    # =========================================================================
    earliest, order = forward_pass(graph)
    project_finish = max(ef for _, ef in earliest.values())

    # =========================================================================
    # Backward Pass: LS and LF
    # =========================================================================
    latest = backward_pass(graph, project_finish)

    # =========================================================================
    # Slack and Critical Path
    # =========================================================================
    critical_path = extract_critical_path(graph, earliest, latest)

    timings = {
        task_id: TaskTiming(
            task_id=task_id,
            duration_days=graph.nodes[task_id]["duration_days"],
            earliest_start=earliest[task_id][0],
            earliest_finish=earliest[task_id][1],
            latest_start=latest[task_id][0],
            latest_finish=latest[task_id][1],
        )
        for task_id in graph.nodes
    }

    logger.debug(
        f"Scheduled {len(timings)} tasks: duration={project_finish} days, "
        f"critical path={len(critical_path)} tasks"
    )

    return ProjectSchedule(
        project_duration=project_finish,
        timings=timings,
        critical_path=critical_path,
        topological_order=order,
    )


def analyze_schedule(
    tasks: Sequence[Task],
    edges: Iterable[DependencyEdge],
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> ProjectSchedule:
    """
    Perform complete CPM analysis on a task snapshot.

    Returns timings for every task, the project duration and the ordered
    critical path. An empty snapshot yields an empty schedule.
    """
    graph = build_dependency_graph(tasks, edges, hours_per_day)
    return analyze_graph(graph)


def calculate_critical_path(
    tasks: Sequence[Task],
    edges: Iterable[DependencyEdge],
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> list[str]:
    """Return only the ordered critical path task IDs."""
    return analyze_schedule(tasks, edges, hours_per_day).critical_path
