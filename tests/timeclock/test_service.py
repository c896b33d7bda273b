from __future__ import annotations

import threading
import time
from datetime import timezone

import pytest

from timeflow.core.enums import AttendanceState
from timeflow.core.exceptions import InvalidTransition
from timeflow.timeclock.service import TimeClockService

from .test_session import FakeClock, InMemoryTimeClock, at


class SlowClockIn(InMemoryTimeClock):
    """Holds the clock-in request open long enough for a second caller to arrive."""

    def clock_in(self, **kwargs):
        time.sleep(0.05)
        return super().clock_in(**kwargs)


def _service(**kwargs):
    clock = FakeClock(at(8))
    repo = kwargs.pop("repo", None) or InMemoryTimeClock(clock)
    service = TimeClockService(repo, tz=timezone.utc, clock=clock, **kwargs)
    return service, repo, clock


def test_same_employee_reuses_session():
    service, _, _ = _service()
    assert service.session_for("e1") is service.session_for("e1")
    assert len(service) == 1


def test_idle_sessions_are_dropped_and_closed():
    service, _, clock = _service(idle_ttl_seconds=3600)
    first = service.session_for("e1")

    clock.now = at(10)
    service.session_for("e2")

    assert len(service) == 1
    assert not first.alive
    assert service.session_for("e1") is not first


def test_session_count_is_capped_least_recently_used_first():
    service, _, _ = _service(max_sessions=2)
    s1 = service.session_for("e1")
    s2 = service.session_for("e2")
    service.session_for("e1")
    service.session_for("e3")

    assert len(service) == 2
    assert not s2.alive
    assert service.session_for("e1") is s1


def test_release_closes_session():
    service, _, _ = _service()
    session = service.session_for("e1")
    service.release("e1")
    assert len(service) == 0
    assert not session.alive


def test_concurrent_clock_in_for_one_employee_reaches_backend_once():
    clock = FakeClock(at(8))
    repo = SlowClockIn(clock)
    service, _, _ = _service(repo=repo)
    barrier = threading.Barrier(2)
    outcomes = []

    def worker():
        barrier.wait()
        try:
            outcomes.append(service.clock_in("e1").state)
        except InvalidTransition:
            outcomes.append("rejected")

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert repo.calls == ["clock_in"]
    assert len(outcomes) == 2
    assert AttendanceState.WORKING in outcomes
    assert "rejected" in outcomes


def test_actions_refresh_before_acting():
    service, repo, clock = _service()
    service.clock_in("e1")
    clock.now = at(9)
    service.start_break("e1")
    clock.now = at(9, 15)
    snap = service.end_break("e1")
    assert snap.total_break_seconds == 900
    clock.now = at(12)
    snap = service.clock_out("e1")
    assert snap.state == AttendanceState.FINISHED
    assert repo.calls == ["clock_in", "start_break", "end_break", "clock_out"]


def test_ticker_uses_configured_interval():
    service, _, _ = _service(tick_interval=5.0)
    ticker = service.ticker_for("e1", lambda snapshot: None)
    assert ticker.interval == pytest.approx(5.0)
    assert not ticker.is_running
