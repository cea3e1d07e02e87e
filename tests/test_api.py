from __future__ import annotations

import pytest

from src.chronosforce.chronosforce.core.enums import EmployeeStatus
from src.chronosforce.chronosforce.main import create_app


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"ENABLE_SCHEDULER": False, "SEED_DEMO_DATA": True})


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, login, password="password123"):
    return client.post("/api/login", json={"login": login, "password": password})


def test_login_and_me(client):
    assert client.get("/api/me").status_code == 401
    assert _login(client, "david", "wrong").status_code == 401

    resp = _login(client, "David Chen")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["employee"]["id"] == "e2"
    assert "password_hash" not in body["employee"]
    assert body["login_status"]["status"] == "OFF"
    assert client.get("/api/me").get_json()["employee"]["username"] == "david"

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/me").status_code == 401


def test_transition_and_today(client):
    _login(client, "david")

    resp = client.post("/api/attendance/transition", json={"status": "ACTIVE", "project_id": "p1"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["record"]["type"] == "CLOCK_IN"
    assert body["employee"]["status"] == "ACTIVE"

    today = client.get("/api/attendance/today").get_json()
    assert [r["type"] for r in today["records"]] == ["CLOCK_IN"]


def test_bad_input_maps_to_400(client):
    _login(client, "david")

    assert client.post("/api/attendance/transition", json={"status": "NAPPING"}).status_code == 400
    assert client.post("/api/attendance/transition", json={"status": "ACTIVE", "project_id": "p3"}).status_code == 400
    assert client.post("/api/attendance/transition", json=["ACTIVE"]).status_code == 400
    assert client.post("/api/leaves", json={"start_date": "soon", "end_date": "2024-06-12", "reason": "x"}).status_code == 400


def test_activity_log_submission(client):
    _login(client, "david")

    resp = client.post(
        "/api/attendance/activity-logs",
        json={"date": "2024-06-03", "start_time": "09:00", "end_time": "17:30", "overtime_hours": 0.5, "project_ids": ["p1"]},
    )

    assert resp.status_code == 201
    logs = client.get("/api/attendance/activity-logs").get_json()["logs"]
    assert [log["date"] for log in logs] == ["2024-06-03"]


def test_activity_log_project_ids_must_be_a_list(client):
    _login(client, "david")

    resp = client.post(
        "/api/attendance/activity-logs",
        json={"date": "2024-06-03", "start_time": "09:00", "end_time": "17:00", "project_ids": "p1"},
    )

    assert resp.status_code == 400
    assert client.get("/api/attendance/activity-logs").get_json()["logs"] == []


def test_leave_approval_flow(app, client):
    _login(client, "david")
    created = client.post(
        "/api/leaves", json={"start_date": "2024-06-10", "end_date": "2024-06-12", "reason": "Family trip"}
    )
    assert created.status_code == 201
    request_id = created.get_json()["request"]["id"]
    assert [r["id"] for r in client.get("/api/leaves/mine").get_json()["requests"]] == [request_id]

    _login(client, "marcus")
    visible = client.get("/api/leaves").get_json()["requests"]
    assert [(r["id"], r["active_stage"]) for r in visible] == [(request_id, "TEAM_LEAD")]

    _login(client, "eleanor")
    outcome = client.post(f"/api/leaves/{request_id}/approve").get_json()
    assert outcome["changed"] is True
    assert outcome["completed"] is True
    assert outcome["request"]["final_status"] == "APPROVED"

    again = client.post(f"/api/leaves/{request_id}/reject").get_json()
    assert again["changed"] is False

    assert app.extensions["chronosforce"].employees_repo.get_by_id("e2").status == EmployeeStatus.LEAVE

    # The request covers past dates only, so the next login derives OFF again.
    assert _login(client, "david").get_json()["login_status"]["status"] == "OFF"


def test_dismiss_and_missing_requests(client):
    _login(client, "marcus")
    request_id = client.post(
        "/api/leaves", json={"start_date": "2024-06-10", "end_date": "2024-06-10", "reason": "Dentist"}
    ).get_json()["request"]["id"]

    _login(client, "james")
    assert client.delete(f"/api/leaves/{request_id}").status_code == 403
    assert client.post("/api/leaves/unknown/approve").status_code == 404

    _login(client, "eleanor")
    assert client.delete(f"/api/leaves/{request_id}").status_code == 200
    assert client.get("/api/leaves").get_json()["requests"] == []


def test_team_and_report(client):
    _login(client, "marcus")
    client.post("/api/attendance/transition", json={"status": "ACTIVE"})
    client.post("/api/attendance/transition", json={"status": "OFF"})

    team = client.get("/api/team").get_json()["employees"]
    assert {e["id"] for e in team} == {"sup1", "e2"}
    assert all(e["editable"] is False for e in team if e["id"] == "sup1")

    report = client.get("/api/reports/worked-time").get_json()
    assert [row["employee_id"] for row in report["rows"]] == ["tl1"]
    assert client.get("/api/reports/worked-time?start=2024-06-05&end=2024-06-01").status_code == 400
