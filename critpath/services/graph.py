"""
Dependency graph operations using NetworkX.

This module handles:
- Building the finish-to-start graph from task and dependency snapshots
- Cycle checks for proposed dependencies
- Downstream (transitively blocked) task lookup
"""

from collections.abc import Iterable, Sequence

import networkx as nx

from critpath.schemas import DependencyEdge, Task
from critpath.services.duration import DEFAULT_HOURS_PER_DAY, estimate_duration
from critpath.logging_config import get_logger

logger = get_logger(__name__)


def unique_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Drop repeated task ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for task in tasks:
        if task.id in seen:
            logger.warning(f"Duplicate task id {task.id!r}, keeping first occurrence")
            continue
        seen.add(task.id)
        unique.append(task)
    return unique


def accepted_edges(
    tasks: Iterable[Task],
    edges: Iterable[DependencyEdge],
) -> list[DependencyEdge]:
    """
    Return the edges that take part in scheduling, in input order.

    An edge is accepted when it is a ``blocks`` edge, both endpoints are
    known tasks, it is not a self-loop, and no earlier edge already links
    the same blocker and dependent.
    """
    task_ids = {task.id for task in tasks}
    seen_pairs: set[tuple[str, str]] = set()
    accepted = []

    for edge in edges:
        if not edge.is_blocking:
            continue
        pair = (edge.blocker_task_id, edge.dependent_task_id)
        if pair[0] not in task_ids or pair[1] not in task_ids:
            logger.debug(f"Dropping dependency {edge.id}: references unknown task")
            continue
        if pair[0] == pair[1]:
            logger.debug(f"Dropping dependency {edge.id}: task {pair[0]} blocks itself")
            continue
        if pair in seen_pairs:
            logger.debug(f"Dropping dependency {edge.id}: duplicate of {pair[0]} -> {pair[1]}")
            continue
        seen_pairs.add(pair)
        accepted.append(edge)

    return accepted


def build_dependency_graph(
    tasks: Sequence[Task],
    edges: Iterable[DependencyEdge],
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> nx.DiGraph:
    """
    Build a NetworkX DiGraph from a task snapshot and its dependencies.

    Returns a graph where:
    - Nodes are task IDs, in input order, carrying ``task``,
      ``duration_days`` and ``index`` (input position)
    - Edges go from blocker -> dependent and carry ``edge_id``
    """
    unique = unique_tasks(tasks)

    graph = nx.DiGraph()
    for index, task in enumerate(unique):
        graph.add_node(
            task.id,
            task=task,
            duration_days=estimate_duration(task, hours_per_day),
            index=index,
        )

    for edge in accepted_edges(unique, edges):
        graph.add_edge(edge.blocker_task_id, edge.dependent_task_id, edge_id=edge.id)

    logger.debug(
        f"Built dependency graph: {graph.number_of_nodes()} tasks, "
        f"{graph.number_of_edges()} edges"
    )
    return graph


def would_create_cycle(
    graph: nx.DiGraph,
    blocker_id: str,
    dependent_id: str,
) -> bool:
    """
    Check if adding an edge (blocker -> dependent) would create a cycle.

    The edge closes a cycle exactly when the blocker is already reachable
    from the dependent. A task blocking itself counts as a cycle. Unknown
    ids never create a cycle because such an edge would be dropped.
    """
    if blocker_id not in graph or dependent_id not in graph:
        return False
    if blocker_id == dependent_id:
        return True
    return nx.has_path(graph, dependent_id, blocker_id)


def downstream_tasks(graph: nx.DiGraph, task_id: str) -> list[str]:
    """
    Get all task IDs transitively blocked by ``task_id``.

    Returns IDs in input order; empty if the task is unknown.
    """
    if task_id not in graph:
        return []

    descendants = nx.descendants(graph, task_id)
    return [node for node in graph.nodes if node in descendants]


def find_cycle_edges(graph: nx.DiGraph, task_ids: Iterable[str]) -> list[tuple[str, str]]:
    """
    Locate one concrete cycle among ``task_ids``.

    Returns the cycle as (blocker, dependent) pairs, or an empty list if
    the subgraph is acyclic.
    """
    try:
        return [(u, v) for u, v in nx.find_cycle(graph.subgraph(task_ids))]
    except nx.NetworkXNoCycle:
        return []
