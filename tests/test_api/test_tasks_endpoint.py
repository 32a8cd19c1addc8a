"""Tests for the maintenance tasks endpoint."""

import json

import pytest

from api.maintenance.tasks import handler
from equipcare.models.task import TASK_LOG_KEY
from equipcare.services.seeds import DAILY_TASKS, WEEKLY_TASKS
from tests.utils.helpers import call_handler


@pytest.mark.unit
def test_list_board_seeds(default_store):
    status, headers, body = call_handler(handler, "GET", "/api/maintenance/tasks?cadence=weekly")

    payload = json.loads(body)
    assert status == 200
    assert headers["x-correlation-id"].startswith("req_")
    assert payload["cadence"] == "Weekly"
    assert [task["id"] for task in payload["tasks"]] == [task["id"] for task in WEEKLY_TASKS]


@pytest.mark.unit
def test_correlation_id_is_echoed(default_store):
    _, headers, _ = call_handler(handler, "GET", "/api/maintenance/tasks", headers={"X-Correlation-ID": "req_fixed"})

    assert headers["x-correlation-id"] == "req_fixed"


@pytest.mark.unit
def test_create_then_list_log(default_store):
    status, _, body = call_handler(
        handler, "POST", "/api/maintenance/tasks?cadence=daily",
        body={"taskName": "Oil Check", "machineId": "CNC-001", "dueDate": "2024-09-01"},
    )

    created = json.loads(body)
    assert status == 201
    assert created["task"]["status"] == "Pending"
    assert created["task"]["priority"] == "Medium"
    assert created["redirectTo"] == "/dashboard/maintenance/daily"
    assert created["notice"]["title"] == "Daily Task Created"

    status, _, body = call_handler(handler, "GET", "/api/maintenance/tasks")
    tasks = json.loads(body)["tasks"]
    assert status == 200
    assert [(t["id"], t["cadence"]) for t in tasks] == [(created["task"]["id"], "Daily")]


@pytest.mark.unit
def test_update_returns_200(default_store):
    default_store.write("dailyTasks", DAILY_TASKS)

    status, _, body = call_handler(
        handler, "POST", "/api/maintenance/tasks?cadence=daily&id=dt001",
        body={"taskName": "Oil Level Check", "machineId": "CNC-001", "dueDate": "Today"},
    )

    assert status == 200
    assert json.loads(body)["task"]["id"] == "dt001"
    assert len(default_store.read("dailyTasks")) == len(DAILY_TASKS)


@pytest.mark.unit
def test_invalid_form_returns_422(default_store):
    status, _, body = call_handler(
        handler, "POST", "/api/maintenance/tasks?cadence=daily",
        body={"taskName": "Oi", "machineId": "CNC-001", "dueDate": "Today"},
    )

    assert status == 422
    assert json.loads(body) == {"errors": {"taskName": ["Task name must be at least 3 characters."]}}
    assert default_store.read("dailyTasks") is None


@pytest.mark.unit
@pytest.mark.parametrize("path,body", [
    ("/api/maintenance/tasks", {"taskName": "Oil Check"}),
    ("/api/maintenance/tasks?cadence=yearly", {"taskName": "Oil Check"}),
    ("/api/maintenance/tasks?cadence=daily", "{not json"),
    ("/api/maintenance/tasks?cadence=daily", ["a", "list"]),
])
def test_bad_requests(default_store, path, body):
    status, _, payload = call_handler(handler, "POST", path, body=body)

    assert status == 400
    assert "error" in json.loads(payload)


@pytest.mark.unit
def test_delete_retains_log(default_store):
    default_store.write("dailyTasks", DAILY_TASKS)
    call_handler(handler, "POST", "/api/maintenance/tasks?cadence=daily&id=dt001", body=DAILY_TASKS[0])

    status, _, body = call_handler(handler, "DELETE", "/api/maintenance/tasks?cadence=daily&id=dt001")

    assert status == 200
    assert json.loads(body)["notice"]["variant"] == "destructive"
    assert "dt001" not in [r["id"] for r in default_store.read("dailyTasks")]
    assert [r["id"] for r in default_store.read(TASK_LOG_KEY)] == ["dt001"]


@pytest.mark.unit
def test_delete_unknown_returns_404(default_store):
    status, _, body = call_handler(handler, "DELETE", "/api/maintenance/tasks?cadence=daily&id=dt999")

    assert status == 404
    assert "dt999" in json.loads(body)["error"]


@pytest.mark.unit
def test_delete_requires_id(default_store):
    status, _, _ = call_handler(handler, "DELETE", "/api/maintenance/tasks?cadence=daily")

    assert status == 400


@pytest.mark.unit
def test_update_unknown_id_returns_404(default_store):
    default_store.write("weeklyTasks", WEEKLY_TASKS)

    status, _, body = call_handler(
        handler, "POST", "/api/maintenance/tasks?cadence=weekly&id=dt001",
        body={"taskName": "Oil Level Check", "machineId": "CNC-001", "dueDate": "Today"},
    )

    assert status == 404
    assert "dt001" in json.loads(body)["error"]
    assert default_store.read(TASK_LOG_KEY) is None
