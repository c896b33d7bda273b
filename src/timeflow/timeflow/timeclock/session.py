from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import day_bounds, local_date, now_utc
from ..common.validators import require_identifier
from ..core.enums import AttendanceState
from ..core.exceptions import InvalidTransition
from .factory import ElapsedStrategyFactory
from .model import SessionSnapshot, TimeClockRecord
from .repository import TimeClockRepository
from .strategies.base import closed_break_seconds

logger = logging.getLogger(__name__)


def find_open_record(records: Iterable[TimeClockRecord]) -> Optional[TimeClockRecord]:
    open_records = [r for r in records if r.is_open]
    if not open_records:
        return None
    return max(open_records, key=lambda r: r.clock_in)


def select_display_record(
    records: Sequence[TimeClockRecord],
    *,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> Optional[TimeClockRecord]:
    """The open record, else the latest record closed today, else None."""

    active = find_open_record(records)
    if active:
        return active

    start, end = day_bounds(local_date(now, tz), tz)
    closed_today = [
        r for r in records
        if r.clock_out is not None and start <= r.clock_in < end and r.clock_out < end
    ]
    if not closed_today:
        return None
    return max(closed_today, key=lambda r: r.clock_out)


def derive_snapshot(
    records: Sequence[TimeClockRecord],
    *,
    now: datetime,
    tz: Optional[tzinfo] = None,
    total_break_seconds: Optional[int] = None,
    factory: Optional[ElapsedStrategyFactory] = None,
) -> SessionSnapshot:
    """Pure function: records (+ accumulated breaks) -> what the clock shows at ``now``."""

    factory = factory or ElapsedStrategyFactory()
    record = select_display_record(records, now=now, tz=tz)
    total = closed_break_seconds(record) if total_break_seconds is None else int(total_break_seconds)

    reading = factory.for_record(record).read(record=record, now=now, total_break_seconds=total)
    return SessionSnapshot(
        state=reading.state,
        record=record,
        elapsed_seconds=reading.elapsed_seconds,
        break_seconds=reading.break_seconds,
        total_break_seconds=total if record else 0,
    )


class TimeClockSession:
    """One employee's clock: derived state plus the clock-in/break/clock-out actions.

    State is never stored; it is recomputed from the fetched records. The only
    session-local value is the running break total per record, which survives a
    backend that keeps a single ``break_start``/``break_end`` pair per record.
    """

    def __init__(
        self,
        repository: TimeClockRepository,
        employee_id: Optional[str],
        *,
        tz: Optional[tzinfo] = None,
        strategy_factory: Optional[ElapsedStrategyFactory] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._repo = repository
        self._employee_id = employee_id
        self._tz = tz
        self._factory = strategy_factory or ElapsedStrategyFactory()
        self._clock = clock
        self._records: list[TimeClockRecord] = []
        self._break_totals: dict[str, int] = {}
        self._alive = True
        self._lock = threading.RLock()

    @property
    def employee_id(self) -> Optional[str]:
        return self._employee_id

    @property
    def records(self) -> list[TimeClockRecord]:
        return list(self._records)

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def lock(self):
        """Held by every read and action; hold it yourself to make refresh + action atomic."""
        return self._lock

    def close(self) -> None:
        """Detach from the screen; late responses become no-ops."""
        self._alive = False

    def active_record(self) -> Optional[TimeClockRecord]:
        with self._lock:
            return find_open_record(self._records)

    def snapshot(self, now: Optional[datetime] = None) -> SessionSnapshot:
        now = now or self._clock()
        with self._lock:
            record = select_display_record(self._records, now=now, tz=self._tz)
            total = self._break_totals.get(record.record_id) if record else None
            return derive_snapshot(
                self._records,
                now=now,
                tz=self._tz,
                total_break_seconds=total,
                factory=self._factory,
            )

    def state(self, now: Optional[datetime] = None) -> AttendanceState:
        return self.snapshot(now).state

    def load(self, records: Iterable[TimeClockRecord]) -> None:
        """Replace the local copy with a freshly fetched list."""

        records = sorted(records, key=lambda r: r.clock_in, reverse=True)
        with self._lock:
            totals: dict[str, int] = {}
            for r in records:
                totals[r.record_id] = max(closed_break_seconds(r), self._break_totals.get(r.record_id, 0))
            self._records = records
            self._break_totals = totals

    def refresh(self, now: Optional[datetime] = None) -> Optional[SessionSnapshot]:
        employee_id = require_identifier(self._employee_id, "employee")
        with self._lock:
            records = self._repo.list_for_employee(employee_id)
            if not self._alive:
                return None
            self.load(records)
            return self.snapshot(now)

    def clock_in(self, shift_id: Optional[str] = None, *, now: Optional[datetime] = None) -> Optional[SessionSnapshot]:
        employee_id = require_identifier(self._employee_id, "employee")
        with self._lock:
            if self.active_record() is not None:
                raise InvalidTransition("Already clocked in; clock out before starting a new record")

            logger.info("clock in employee=%s shift=%s", employee_id, shift_id)
            record = self._repo.clock_in(employee_id=employee_id, shift_id=shift_id)
            if not self._alive:
                return None
            if record is None or record.clock_out is not None:
                return self.refresh(now)

            if record.employee_id is None:
                record = replace(record, employee_id=employee_id)
            self._records = [record] + [r for r in self._records if r.record_id != record.record_id]
            self._break_totals[record.record_id] = closed_break_seconds(record)
            return self.snapshot(now)

    def start_break(self, *, now: Optional[datetime] = None) -> Optional[SessionSnapshot]:
        require_identifier(self._employee_id, "employee")
        with self._lock:
            active = self.active_record()
            if active is None:
                raise InvalidTransition("No open time clock record to start a break on")
            if active.on_break:
                raise InvalidTransition("A break is already in progress")

            logger.info("start break record=%s", active.record_id)
            self._repo.start_break(record_id=active.record_id)
            if not self._alive:
                return None
            return self.refresh(now)

    def end_break(self, *, now: Optional[datetime] = None) -> Optional[SessionSnapshot]:
        require_identifier(self._employee_id, "employee")
        with self._lock:
            active = self.active_record()
            if active is None or not active.on_break:
                raise InvalidTransition("No break in progress")

            before = self._break_totals.get(active.record_id, 0)
            logger.info("end break record=%s", active.record_id)
            record = self._repo.end_break(record_id=active.record_id)
            if not self._alive:
                return None

            if record is None:
                if self.refresh(now) is None:
                    return None
                record = next((r for r in self._records if r.record_id == active.record_id), None)
                if record is None or record.on_break:
                    return self.snapshot(now)
            else:
                self._records = [record if r.record_id == record.record_id else r for r in self._records]

            self._break_totals[record.record_id] = before + closed_break_seconds(record)
            return self.snapshot(now)

    def clock_out(self, *, now: Optional[datetime] = None) -> Optional[SessionSnapshot]:
        employee_id = require_identifier(self._employee_id, "employee")
        with self._lock:
            active = self.active_record()
            if active is None:
                raise InvalidTransition("No open time clock record to clock out")
            if active.on_break:
                raise InvalidTransition("End the break before clocking out")

            logger.info("clock out employee=%s record=%s", employee_id, active.record_id)
            self._repo.clock_out(employee_id=employee_id, record_id=active.record_id)
            if not self._alive:
                return None
            return self.refresh(now)
