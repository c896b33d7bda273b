from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from timeflow.container import build_container
from timeflow.main import create_app
from timeflow.scheduling.model import Shift
from timeflow.timeclock.model import TimeClockRecord

from .scheduling.fakes import InMemoryShifts
from .timeclock.test_session import FakeClock, InMemoryTimeClock

UTC = timezone.utc
NOW = datetime(2025, 1, 8, 10, 0, tzinfo=UTC)


@pytest.fixture()
def env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    clock = FakeClock(NOW)
    time_clock = InMemoryTimeClock(clock)
    shifts = InMemoryShifts(
        [
            Shift("s1", "e1", "c1", NOW.replace(hour=7), NOW.replace(hour=15), created_at=NOW - timedelta(days=3)),
        ]
    )
    container = build_container(tz=UTC, time_clock_repo=time_clock, shifts_repo=shifts, clock=clock)
    app = create_app(container)
    return app.test_client(), clock, time_clock, shifts


def test_clock_flow_over_http(env):
    client, clock, _, _ = env

    assert client.get("/api/employees/e1/clock").get_json()["state"] == "idle"

    body = client.post("/api/employees/e1/clock/in", json={"shift_id": "s1"}).get_json()
    assert body["state"] == "working"

    clock.now = NOW + timedelta(minutes=90)
    body = client.get("/api/employees/e1/clock").get_json()
    assert body["elapsed_seconds"] == 5400
    assert body["elapsed"] == "01:30:00"

    assert client.post("/api/employees/e1/clock/break/start").get_json()["state"] == "on_break"

    resp = client.post("/api/employees/e1/clock/out")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "InvalidTransition"

    clock.now = NOW + timedelta(minutes=120)
    assert client.post("/api/employees/e1/clock/break/end").get_json()["total_break_seconds"] == 1800
    assert client.post("/api/employees/e1/clock/out").get_json()["state"] == "finished"


def test_double_clock_in_is_conflict(env):
    client, _, time_clock, _ = env
    time_clock.records["r1"] = TimeClockRecord("r1", "e1", NOW - timedelta(hours=1))
    resp = client.post("/api/employees/e1/clock/in")
    assert resp.status_code == 409


def test_daily_report(env):
    client, _, time_clock, _ = env
    time_clock.records["r1"] = TimeClockRecord("r1", "e1", NOW.replace(hour=8), clock_out=NOW.replace(hour=9, minute=30))
    body = client.get("/api/employees/e1/reports/daily?date=2025-01-08").get_json()
    assert body["worked_seconds"] == 5400
    assert body["days"][0]["worked_hours"] == "1:30"

    assert client.get("/api/employees/e1/reports/weekly?date=bad").status_code == 400


def test_shift_endpoints(env):
    client, _, _, shifts = env

    resp = client.post(
        "/api/shifts",
        json={"employee_id": "e1", "company_id": "c1", "start_time": "2025-01-08T14:00:00Z", "end_time": "2025-01-08T18:00:00Z"},
    )
    assert resp.status_code == 409
    assert resp.get_json()["conflicting"]["id"] == "s1"

    resp = client.post("/api/shifts", json={"employee_id": "e2", "company_id": "c1", "slot_id": "night", "date": "2025-01-08"})
    assert resp.status_code == 201
    new_id = resp.get_json()["id"]

    resp = client.patch(f"/api/shifts/{new_id}", json={"slot_id": "afternoon", "date": "2025-01-09"})
    assert resp.get_json()["start_time"] == "2025-01-09T14:00:00+00:00"

    grid = client.get("/api/schedule/grid?company=c1&week=2025-01-08").get_json()
    assert len(grid["days"]) == 7
    assert [s["id"] for s in grid["days"][2]["slots"]["morning"]] == ["s1"]

    assert client.delete(f"/api/shifts/{new_id}").status_code == 204
    assert new_id not in shifts.shifts


def test_missed_sweep_endpoint(env):
    client, _, _, shifts = env
    body = client.post("/api/shifts/missed/sweep", json={}).get_json()
    assert body["flagged"] == ["s1"]
    assert shifts.get_by_id("s1").is_missed


def test_missed_list_endpoint(env):
    client, _, _, _ = env
    client.post("/api/shifts/missed/sweep", json={})

    body = client.get("/api/shifts/missed?company=c1").get_json()
    assert [(m["id"], m["status"]) for m in body] == [("s1", "missed")]
    assert client.get("/api/shifts/missed?exclude_employee=e1").get_json() == []


def test_missing_interval_is_bad_request(env):
    client, _, _, _ = env
    resp = client.post("/api/shifts", json={"employee_id": "e1", "company_id": "c1"})
    assert resp.status_code == 400
