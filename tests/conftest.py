"""
Pytest configuration and fixtures for Critpath tests.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from critpath.config import get_settings
from critpath.main import app
from critpath.schemas import DependencyEdge, Task


@pytest.fixture
def make_task():
    """
    Factory for tasks.

    ``days`` sets the duration through estimated effort (8 hours per day);
    any other keyword goes straight to the Task model.
    """
    def _make(task_id: str, days: int | None = None, **kwargs) -> Task:
        if days is not None:
            kwargs.setdefault("estimated_effort_hours", days * 8)
        kwargs.setdefault("title", f"Task {task_id}")
        return Task(id=task_id, **kwargs)

    return _make


@pytest.fixture
def make_edge():
    """Factory for dependencies; defaults to a ``blocks`` edge."""
    def _make(blocker: str, dependent: str, edge_id: str | None = None, type: str = "blocks") -> DependencyEdge:
        return DependencyEdge(
            id=edge_id or f"{blocker}->{dependent}",
            blocker_task_id=blocker,
            dependent_task_id=dependent,
            type=type,
        )

    return _make


@pytest.fixture
def chain(make_task, make_edge):
    """A -> B -> C, two days each."""
    tasks = [make_task("A", 2), make_task("B", 2), make_task("C", 2)]
    edges = [make_edge("A", "B"), make_edge("B", "C")]
    return tasks, edges


@pytest.fixture
def diamond(make_task, make_edge):
    """A blocks B and C; B and C block D. A=1, B=4, C=2, D=1."""
    tasks = [make_task("A", 1), make_task("B", 4), make_task("C", 2), make_task("D", 1)]
    edges = [
        make_edge("A", "B"),
        make_edge("A", "C"),
        make_edge("B", "D"),
        make_edge("C", "D"),
    ]
    return tasks, edges


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test fresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client():
    """Async test client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
