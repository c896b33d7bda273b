from __future__ import annotations

from datetime import datetime, timedelta, timezone

from timeflow.core.enums import AttendanceState
from timeflow.timeclock.model import TimeClockRecord
from timeflow.timeclock.session import TimeClockSession
from timeflow.timeclock.ticker import SessionTicker

UTC = timezone.utc
START = datetime(2025, 3, 3, 8, 0, tzinfo=UTC)


class StaticRepo:
    def __init__(self, records):
        self._records = records

    def list_for_employee(self, employee_id: str):
        return list(self._records)


def _session(records, now):
    session = TimeClockSession(StaticRepo(records), "e1", tz=UTC, clock=lambda: now)
    session.refresh()
    return session


def test_tick_pushes_recomputed_snapshot_while_working():
    seen = []
    now = {"value": START + timedelta(minutes=5)}
    session = _session([TimeClockRecord("r1", "e1", START)], now["value"])
    ticker = SessionTicker(session, seen.append, clock=lambda: now["value"])

    ticker.tick()
    now["value"] = START + timedelta(minutes=30)
    ticker.tick()

    assert [s.elapsed_seconds for s in seen] == [300, 1800]
    assert all(s.state == AttendanceState.WORKING for s in seen)


def test_missed_ticks_self_correct():
    seen = []
    session = _session([TimeClockRecord("r1", "e1", START)], START)
    ticker = SessionTicker(session, seen.append, clock=lambda: START + timedelta(hours=3))

    ticker.tick()

    assert seen[0].elapsed_seconds == 3 * 3600


def test_tick_is_silent_when_idle_or_closed():
    seen = []
    session = _session([], START)
    ticker = SessionTicker(session, seen.append, clock=lambda: START)
    assert ticker.tick() is None

    live = _session([TimeClockRecord("r1", "e1", START)], START)
    live.close()
    assert SessionTicker(live, seen.append, clock=lambda: START).tick() is None
    assert seen == []


def test_start_and_stop_thread():
    seen = []
    session = _session([TimeClockRecord("r1", "e1", START)], START)
    ticker = SessionTicker(session, seen.append, interval=0.01, clock=lambda: START)

    ticker.start()
    assert ticker.is_running
    ticker.stop()
    assert not ticker.is_running
