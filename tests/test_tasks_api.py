from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine

from taskflow.main import app
from taskflow.services.task_service import TaskService


def test_create_list_complete_delete_scenario(client):
    created = client.post("/tasks", json={"title": "Buy milk", "due_date": "2025-01-10"})
    assert created.status_code == 201
    body = created.json()
    assert body["id"] == 1
    assert body["message"]

    listed = client.get("/tasks")
    assert listed.status_code == 200
    [task] = listed.json()
    assert task["id"] == 1
    assert task["title"] == "Buy milk"
    assert task["due_date"] == "2025-01-10"
    assert task["status"] == "PENDING"
    datetime.fromisoformat(task["created_at"])

    done = client.put("/tasks/1/done")
    assert done.status_code == 200
    assert done.headers["content-type"].startswith("text/plain")
    assert client.get("/tasks").json()[0]["status"] == "COMPLETED"

    deleted = client.delete("/tasks/1")
    assert deleted.status_code == 200
    assert all(t["id"] != 1 for t in client.get("/tasks").json())


def test_create_forces_pending_status(client):
    client.post("/tasks", json={"title": "x", "due_date": "2025-01-10", "status": "COMPLETED"})
    assert client.get("/tasks").json()[0]["status"] == "PENDING"


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "due_date": "2025-01-10"},
        {"title": "Buy milk", "due_date": ""},
        {"title": "Buy milk"},
        {"due_date": "2025-01-10"},
        {},
    ],
)
def test_create_with_missing_fields_is_client_error(client, payload):
    response = client.post("/tasks", json=payload)
    assert response.status_code == 400
    assert response.text == "Title and due date are required."
    assert client.get("/tasks").json() == []


def test_create_without_body_is_client_error(client):
    assert client.post("/tasks").status_code == 400


def test_complete_repeat_is_ok_and_unknown_is_404(client):
    client.post("/tasks", json={"title": "x", "due_date": "2025-01-10"})
    assert client.put("/tasks/1/done").status_code == 200
    assert client.put("/tasks/1/done").status_code == 200
    assert client.put("/tasks/999/done").status_code == 404


def test_update(client):
    client.post("/tasks", json={"title": "Buy milk", "due_date": "2025-01-10"})
    before = client.get("/tasks").json()[0]

    response = client.put("/tasks/1", json={"title": "Buy bread", "due_date": "2025-01-12"})
    assert response.status_code == 200

    after = client.get("/tasks").json()[0]
    assert after["title"] == "Buy bread"
    assert after["due_date"] == "2025-01-12"
    assert after["status"] == before["status"]
    assert after["created_at"] == before["created_at"]


def test_update_unknown_task_is_404(client):
    response = client.put("/tasks/999", json={"title": "x", "due_date": "2025-01-01"})
    assert response.status_code == 404
    assert response.text == "Task not found."


def test_update_with_missing_fields_is_400(client):
    client.post("/tasks", json={"title": "Buy milk", "due_date": "2025-01-10"})
    assert client.put("/tasks/1", json={"title": "", "due_date": "2025-01-10"}).status_code == 400
    assert client.put("/tasks/1", json={"title": "x"}).status_code == 400
    assert client.get("/tasks").json()[0]["title"] == "Buy milk"


def test_delete_unknown_task_is_404(client):
    assert client.delete("/tasks/999").status_code == 404


def test_non_numeric_id_is_client_error(client):
    assert client.delete("/tasks/abc").status_code == 400


def test_sort_query(client):
    client.post("/tasks", json={"title": "late", "due_date": "2025-03-01"})
    client.post("/tasks", json={"title": "soon", "due_date": "2025-01-01"})
    client.post("/tasks", json={"title": "middle", "due_date": "2025-02-01"})

    by_date = client.get("/tasks", params={"sort": "date"}).json()
    assert [t["due_date"] for t in by_date] == ["2025-01-01", "2025-02-01", "2025-03-01"]

    by_creation = client.get("/tasks").json()
    created = [t["created_at"] for t in by_creation]
    assert created == sorted(created, reverse=True)
    assert [t["title"] for t in by_creation] == ["middle", "soon", "late"]

    assert client.get("/tasks", params={"sort": "title"}).json() == by_creation


def test_store_error_is_generic_500():
    app.state.task_service = TaskService(create_engine("sqlite://"))
    try:
        response = TestClient(app).get("/tasks")
    finally:
        app.state.task_service = None

    assert response.status_code == 500
    assert response.text == "Internal server error while listing tasks."


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "store": True}


def test_create_persists_with_current_store_release(client):
    response = client.post("/tasks", json={"title": "Buy milk", "due_date": "2025-01-10"})
    assert response.status_code == 201

    [task] = client.get("/tasks").json()
    created = datetime.fromisoformat(task["created_at"])
    assert created.year >= 2025


@pytest.mark.parametrize("due_date", ["2025-W02-5", "20250110"])
def test_non_calendar_due_date_is_client_error(client, due_date):
    response = client.post("/tasks", json={"title": "x", "due_date": due_date})
    assert response.status_code == 400
    assert response.text == "Due date must be a valid date (YYYY-MM-DD)."
    assert client.get("/tasks").json() == []


@pytest.mark.parametrize(
    "method, path, payload",
    [
        ("PUT", "/tasks/99999999999999999999/done", None),
        ("PUT", "/tasks/99999999999999999999", {"title": "x", "due_date": "2025-01-01"}),
        ("DELETE", "/tasks/99999999999999999999", None),
    ],
)
def test_id_beyond_the_key_range_is_404(client, method, path, payload):
    response = client.request(method, path, json=payload)
    assert response.status_code == 404
    assert response.text == "Task not found."


def test_title_whitespace_is_trimmed(client):
    client.post("/tasks", json={"title": "  Buy milk  ", "due_date": "2025-01-10"})
    assert client.get("/tasks").json()[0]["title"] == "Buy milk"
