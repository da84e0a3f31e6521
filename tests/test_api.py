"""
HTTP surface: request parsing, responses and error mapping.
"""

import pytest

from critpath.config import Settings, get_settings
from critpath.main import app


def _task(task_id: str, hours: int = 16, **extra) -> dict:
    return {"id": task_id, "title": f"Task {task_id}", "estimatedEffortHours": hours, **extra}


def _blocks(blocker: str, dependent: str) -> dict:
    return {
        "id": f"{blocker}->{dependent}",
        "blockerTaskId": blocker,
        "dependentTaskId": dependent,
        "type": "blocks",
    }


CHAIN = {
    "tasks": [_task("A"), _task("B"), _task("C")],
    "dependencies": [_blocks("A", "B"), _blocks("B", "C")],
}

CYCLE = {
    "tasks": [_task("A"), _task("B")],
    "dependencies": [_blocks("A", "B"), _blocks("B", "A")],
}


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_chain(self, client):
        response = await client.post("/schedule/analyze", json=CHAIN)

        assert response.status_code == 200
        body = response.json()
        assert body["project_duration"] == 6
        assert body["critical_path"] == ["A", "B", "C"]
        assert body["critical_task_count"] == 3
        assert [t["earliest_finish"] for t in body["tasks"]] == [2, 4, 6]
        assert all(t["is_critical"] and t["total_slack"] == 0 for t in body["tasks"])

    @pytest.mark.asyncio
    async def test_cycle_is_a_client_error(self, client):
        response = await client.post("/schedule/analyze", json=CYCLE)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "cycle_detected"
        assert body["message"] == "dependency cycle detected involving tasks: A, B"
        assert len(body["details"]) == 2

    @pytest.mark.asyncio
    async def test_empty_snapshot(self, client):
        response = await client.post("/schedule/analyze", json={"tasks": []})

        assert response.status_code == 200
        assert response.json()["critical_path"] == []
        assert response.json()["project_duration"] == 0

    @pytest.mark.asyncio
    async def test_malformed_dates_do_not_fail_request(self, client):
        payload = {"tasks": [_task("A", hours=24, startAt="whenever", dueAt="2026-01-05")]}
        response = await client.post("/schedule/analyze", json=payload)

        assert response.status_code == 200
        assert response.json()["project_duration"] == 3

    @pytest.mark.asyncio
    async def test_integer_ids(self, client):
        payload = {
            "tasks": [{"id": 1, "estimatedEffortHours": 16}, {"id": 2, "status": "archived"}],
            "dependencies": [{"id": 10, "blockerTaskId": 1, "dependentTaskId": 2}],
        }
        response = await client.post("/schedule/analyze", json=payload)

        assert response.status_code == 200
        assert response.json()["critical_path"] == ["1", "2"]
        assert response.json()["project_duration"] == 3

    @pytest.mark.asyncio
    async def test_too_many_tasks(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(max_tasks=2)

        response = await client.post("/schedule/analyze", json=CHAIN)

        assert response.status_code == 413
        assert response.json()["error"] == "too_many_tasks"


class TestTimeline:

    @pytest.mark.asyncio
    async def test_bars_and_links(self, client):
        payload = {**CHAIN, "reference_date": "2026-03-02"}
        response = await client.post("/schedule/timeline", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["critical_path"] == ["A", "B", "C"]
        assert body["bars"][0]["start_date"] == "2026-03-02"
        assert body["bars"][0]["end_date"] == "2026-03-04"
        assert body["bars"][0]["is_critical"] is True
        assert [link["relation_kind"] for link in body["links"]] == ["finish_to_start"] * 2

    @pytest.mark.asyncio
    async def test_precomputed_critical_path(self, client):
        payload = {**CYCLE, "critical_path_task_ids": ["B"], "reference_date": "2026-03-02"}
        response = await client.post("/schedule/timeline", json=payload)

        assert response.status_code == 200
        assert [bar["is_critical"] for bar in response.json()["bars"]] == [False, True]


class TestSimulate:

    @pytest.mark.asyncio
    async def test_duration_change(self, client):
        payload = {**CHAIN, "changes": [{"task_id": "B", "duration_days": 5}]}
        response = await client.post("/schedule/simulate", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["impact_days"] == 3
        assert [impact["task_id"] for impact in body["affected_tasks"]] == ["B", "C"]

    @pytest.mark.asyncio
    async def test_rejects_non_positive_duration(self, client):
        payload = {**CHAIN, "changes": [{"task_id": "B", "duration_days": 0}]}
        response = await client.post("/schedule/simulate", json=payload)
        assert response.status_code == 422


class TestDependencyCheck:

    @pytest.mark.asyncio
    async def test_closing_edge(self, client):
        payload = {**CHAIN, "blocker_task_id": "C", "dependent_task_id": "A"}
        response = await client.post("/schedule/dependencies/check", json=payload)

        assert response.status_code == 200
        assert response.json() == {"would_create_cycle": True}

    @pytest.mark.asyncio
    async def test_safe_edge(self, client):
        payload = {**CHAIN, "blocker_task_id": "A", "dependent_task_id": "C"}
        response = await client.post("/schedule/dependencies/check", json=payload)
        assert response.json() == {"would_create_cycle": False}
