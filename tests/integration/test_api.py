"""Tests for the task HTTP API.

Exercises every endpoint through FastAPI's test client, including
status codes, error bodies and the JSON task shape.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from taskflow.api import create_app
from taskflow.config import DatabaseSettings, ServerSettings, TaskflowSettings
from taskflow.database import build_engine
from taskflow.services import TaskStore


def create(client: TestClient, title: str, description: str | None = None) -> dict:
    body = {"title": title}
    if description is not None:
        body["description"] = description
    response = client.post("/tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateTask:
    """POST /tasks"""

    def test_create_returns_201_and_task(self, api_client):
        response = api_client.post(
            "/tasks", json={"title": "Buy milk", "description": "2%"}
        )

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"id", "title", "description", "completed", "createdAt"}
        assert data["title"] == "Buy milk"
        assert data["description"] == "2%"
        assert data["completed"] is False
        assert isinstance(data["id"], int) and data["id"] > 0
        assert datetime.fromisoformat(data["createdAt"]).tzinfo is not None

    def test_description_null_when_absent(self, api_client):
        assert create(api_client, "Call Bob")["description"] is None

    @pytest.mark.parametrize("title", ["", "   "])
    def test_empty_title_returns_400(self, api_client, title):
        response = api_client.post("/tasks", json={"title": title})

        assert response.status_code == 400
        body = response.json()
        assert "title" in body["detail"]
        assert body["errors"][0]["field"] == "title"

    def test_missing_title_returns_400(self, api_client):
        response = api_client.post("/tasks", json={"description": "no title"})

        assert response.status_code == 400
        assert "title" in response.json()["detail"]

    def test_malformed_json_returns_400(self, api_client):
        response = api_client.post(
            "/tasks",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_client_cannot_set_completed(self, api_client):
        response = api_client.post("/tasks", json={"title": "t", "completed": True})
        assert response.status_code == 400

    def test_rejected_create_stores_nothing(self, api_client):
        api_client.post("/tasks", json={"title": ""})
        assert api_client.get("/tasks").json() == []


class TestListTasks:
    """GET /tasks"""

    def test_empty_list(self, api_client):
        response = api_client.get("/tasks")

        assert response.status_code == 200
        assert response.json() == []

    def test_creation_order_and_unfiltered(self, api_client):
        a = create(api_client, "Buy milk")
        b = create(api_client, "Call Bob")
        api_client.patch(f"/tasks/{a['id']}", json={"completed": True})

        data = api_client.get("/tasks").json()
        assert [t["id"] for t in data] == [a["id"], b["id"]]
        assert [t["completed"] for t in data] == [True, False]


class TestUpdateTask:
    """PATCH /tasks/{id}"""

    def test_complete_and_reopen(self, api_client):
        task = create(api_client, "Buy milk")

        response = api_client.patch(f"/tasks/{task['id']}", json={"completed": True})
        assert response.status_code == 200
        assert response.json()["completed"] is True

        response = api_client.patch(f"/tasks/{task['id']}", json={"completed": False})
        assert response.status_code == 200
        assert response.json()["completed"] is False

    def test_immutable_fields_unchanged(self, api_client):
        task = create(api_client, "Buy milk", "2%")
        updated = api_client.patch(
            f"/tasks/{task['id']}", json={"completed": True}
        ).json()

        assert {k: v for k, v in updated.items() if k != "completed"} == {
            k: v for k, v in task.items() if k != "completed"
        }

    def test_unknown_id_returns_404(self, api_client):
        response = api_client.patch("/tasks/999", json={"completed": True})

        assert response.status_code == 404
        assert response.json() == {"detail": "Task 999 not found"}

    def test_title_in_patch_returns_400(self, api_client):
        task = create(api_client, "Buy milk")
        response = api_client.patch(f"/tasks/{task['id']}", json={"title": "x"})

        assert response.status_code == 400
        assert api_client.get("/tasks").json()[0]["title"] == "Buy milk"

    def test_non_boolean_returns_400(self, api_client):
        task = create(api_client, "Buy milk")
        response = api_client.patch(f"/tasks/{task['id']}", json={"completed": "yes"})
        assert response.status_code == 400

    def test_null_completed_returns_400(self, api_client):
        task = create(api_client, "Buy milk")
        api_client.patch(f"/tasks/{task['id']}", json={"completed": True})

        response = api_client.patch(f"/tasks/{task['id']}", json={"completed": None})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "completed"
        assert api_client.get("/tasks").json()[0]["completed"] is True

    def test_empty_patch_returns_task(self, api_client):
        task = create(api_client, "Buy milk")
        response = api_client.patch(f"/tasks/{task['id']}", json={})

        assert response.status_code == 200
        assert response.json() == task

    @pytest.mark.parametrize("task_id", ["99999999999999999999", str(2**63), "0"])
    def test_out_of_range_id_returns_404(self, api_client, task_id):
        response = api_client.patch(f"/tasks/{task_id}", json={"completed": True})

        assert response.status_code == 404
        assert response.json() == {"detail": f"Task {task_id} not found"}

    def test_non_integer_id_returns_400(self, api_client):
        response = api_client.patch("/tasks/abc", json={"completed": True})
        assert response.status_code == 400


class TestDeleteTask:
    """DELETE /tasks/{id}"""

    def test_delete_returns_204(self, api_client):
        task = create(api_client, "Buy milk")
        response = api_client.delete(f"/tasks/{task['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert api_client.get("/tasks").json() == []

    def test_unknown_id_returns_404(self, api_client):
        response = api_client.delete("/tasks/999")
        assert response.status_code == 404

    @pytest.mark.parametrize("task_id", ["99999999999999999999", str(2**63), "-1"])
    def test_out_of_range_id_returns_404(self, api_client, task_id):
        create(api_client, "Buy milk")
        response = api_client.delete(f"/tasks/{task_id}")

        assert response.status_code == 404
        assert len(api_client.get("/tasks").json()) == 1

    def test_patch_after_delete_returns_404(self, api_client):
        task = create(api_client, "Buy milk")
        api_client.delete(f"/tasks/{task['id']}")

        response = api_client.patch(f"/tasks/{task['id']}", json={"completed": True})
        assert response.status_code == 404


class TestHealth:
    """GET /health"""

    def test_health_reports_count(self, api_client):
        create(api_client, "Buy milk")
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "tasks": 1, "completed": 0}

    def test_health_unavailable_without_table(self, test_settings):
        store = TaskStore(build_engine(DatabaseSettings(url="sqlite://")))
        with TestClient(create_app(store=store, settings=test_settings)) as client:
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unavailable"}

    def test_health_unavailable_when_count_query_fails(self, api_client, store):
        """A database error during the count is a 503, not a 500."""
        with patch.object(
            store, "summary", side_effect=OperationalError("SELECT", {}, Exception())
        ):
            response = api_client.get("/health")

        assert response.status_code == 503


class TestApiPrefix:
    """Routes mounted under a configured prefix."""

    def test_prefixed_routes(self, store, test_settings):
        settings = TaskflowSettings(
            database=test_settings.database, server=ServerSettings(api_prefix="/api")
        )
        with TestClient(create_app(store=store, settings=settings)) as client:
            assert client.post("/api/tasks", json={"title": "t"}).status_code == 201
            assert len(client.get("/api/tasks").json()) == 1
            assert client.get("/tasks").status_code == 404


class TestScenario:
    """The full Buy milk / Call Bob flow over HTTP."""

    def test_scenario(self, api_client):
        a = create(api_client, "Buy milk")
        b = create(api_client, "Call Bob")
        assert [t["title"] for t in api_client.get("/tasks").json()] == [
            "Buy milk",
            "Call Bob",
        ]

        api_client.patch(f"/tasks/{a['id']}", json={"completed": True})
        completed = [t for t in api_client.get("/tasks").json() if t["completed"]]
        assert [t["id"] for t in completed] == [a["id"]]

        assert api_client.delete(f"/tasks/{b['id']}").status_code == 204
        assert [t["id"] for t in api_client.get("/tasks").json()] == [a["id"]]
