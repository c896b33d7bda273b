from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import (
    day_bounds,
    format_duration_short,
    format_hours_minutes,
    local_date,
    now_utc,
    week_start,
)
from ..common.validators import require_identifier
from ..timeclock.model import TimeClockRecord
from ..timeclock.repository import TimeClockRepository
from .calculator.base import DurationCalculator
from .calculator.standard_calculator import StandardDurationCalculator
from .model import AttendanceSummary, DaySummary, EmployeeHours


class AttendanceReportAggregator:
    """Turns time clock records into day buckets and period totals.

    Overlapping records are summed, not deduplicated.
    """

    def __init__(self, *, calculator: Optional[DurationCalculator] = None, tz: Optional[tzinfo] = None):
        self._calculator = calculator or StandardDurationCalculator()
        self._tz = tz

    def period(
        self,
        records: Iterable[TimeClockRecord],
        *,
        start: date,
        end: date,
        now: datetime,
    ) -> AttendanceSummary:
        window_start = day_bounds(start, self._tz)[0]
        window_end = day_bounds(end, self._tz)[1]

        buckets: dict[date, DaySummary] = {}
        for r in sorted(records, key=lambda x: x.clock_in):
            if not window_start <= r.clock_in < window_end:
                continue

            worked = self._calculator.worked_seconds(r, now=now)
            on_break = self._calculator.break_seconds(r, now=now)
            key = local_date(r.clock_in, self._tz)

            bucket = buckets.get(key)
            if not bucket:
                bucket = DaySummary(work_date=key, clock_in=r.clock_in, clock_out=r.clock_out)
                buckets[key] = bucket
            else:
                if r.clock_in < bucket.clock_in:
                    bucket.clock_in = r.clock_in
                if r.clock_out and (bucket.clock_out is None or r.clock_out > bucket.clock_out):
                    bucket.clock_out = r.clock_out

            bucket.worked_seconds += worked
            bucket.break_seconds += on_break
            bucket.record_count += 1

        days = sorted(buckets.values(), key=lambda d: d.work_date)
        return AttendanceSummary(
            start=start,
            end=end,
            worked_seconds=sum(d.worked_seconds for d in days),
            break_seconds=sum(d.break_seconds for d in days),
            days=days,
        )

    def daily(self, records: Iterable[TimeClockRecord], *, day: date, now: datetime) -> AttendanceSummary:
        return self.period(records, start=day, end=day, now=now)

    def weekly(self, records: Iterable[TimeClockRecord], *, day: date, now: datetime) -> AttendanceSummary:
        """Monday-Sunday week containing ``day``."""
        start = week_start(day)
        return self.period(records, start=start, end=start + timedelta(days=6), now=now)

    def hours_by_employee(self, records: Iterable[TimeClockRecord]) -> list[EmployeeHours]:
        """Admin roll-up from the backend's own hour totals."""

        totals: dict[str, dict] = {}
        for r in records:
            key = r.employee_id or "-"
            t = totals.setdefault(key, {"hours": 0.0, "overtime": 0.0, "entries": 0})
            t["hours"] += r.total_hours or 0.0
            t["overtime"] += r.overtime_hours or 0.0
            t["entries"] += 1

        out = [
            EmployeeHours(employee_id=k, hours=round(v["hours"], 2), overtime=round(v["overtime"], 2), entries=v["entries"])
            for k, v in totals.items()
        ]
        out.sort(key=lambda x: x.hours, reverse=True)
        return out

    def to_rows(self, summary: AttendanceSummary) -> list[dict]:
        rows = []
        for d in summary.days:
            clock_in = d.clock_in.astimezone(self._tz)
            clock_out = d.clock_out.astimezone(self._tz) if d.clock_out else None
            rows.append(
                {
                    "work_date": d.work_date.strftime("%Y-%m-%d"),
                    "day_label": d.work_date.strftime("%a, %b %d"),
                    "clock_in": clock_in.strftime("%H:%M"),
                    "clock_out": clock_out.strftime("%H:%M") if clock_out else "-",
                    "worked_seconds": d.worked_seconds,
                    "break_seconds": d.break_seconds,
                    "worked_hours": format_hours_minutes(d.worked_seconds),
                    "break_label": format_duration_short(d.break_seconds),
                    "records": d.record_count,
                }
            )
        return rows


class AttendanceReportService:
    """Use case: fetch one employee's records and aggregate a day or a week."""

    def __init__(
        self,
        time_clock: TimeClockRepository,
        *,
        aggregator: Optional[AttendanceReportAggregator] = None,
        tz: Optional[tzinfo] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._time_clock = time_clock
        self._aggregator = aggregator or AttendanceReportAggregator(tz=tz)
        self._tz = tz
        self._clock = clock

    @property
    def aggregator(self) -> AttendanceReportAggregator:
        return self._aggregator

    def _load(self, employee_id: str) -> list[TimeClockRecord]:
        return list(self._time_clock.list_for_employee(require_identifier(employee_id, "employee")))

    def daily_for_employee(self, employee_id: str, *, day: Optional[date] = None, now: Optional[datetime] = None) -> AttendanceSummary:
        now = now or self._clock()
        day = day or local_date(now, self._tz)
        return self._aggregator.daily(self._load(employee_id), day=day, now=now)

    def weekly_for_employee(self, employee_id: str, *, day: Optional[date] = None, now: Optional[datetime] = None) -> AttendanceSummary:
        now = now or self._clock()
        day = day or local_date(now, self._tz)
        return self._aggregator.weekly(self._load(employee_id), day=day, now=now)
