from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass
class DaySummary:
    """One calendar-date bucket; clock times widen to the min/max observed."""

    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    worked_seconds: int = 0
    break_seconds: int = 0
    record_count: int = 0


@dataclass
class AttendanceSummary:
    """Read-model for a report view; computed per call, never persisted."""

    start: date
    end: date
    worked_seconds: int = 0
    break_seconds: int = 0
    days: list[DaySummary] = field(default_factory=list)

    @property
    def days_worked(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class EmployeeHours:
    employee_id: str
    hours: float
    overtime: float
    entries: int
