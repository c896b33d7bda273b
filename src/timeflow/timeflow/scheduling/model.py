from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional

from ..api.rest_base import optional_float, pick_ref, to_backend_payload
from ..common.datetime_utils import parse_instant, to_iso
from ..common.validators import require_hour
from ..core.constants import DEFAULT_BREAK_MINUTES
from ..core.enums import ShiftStatus
from ..core.exceptions import ValidationError
from ..timeclock.model import TimeClockRecord


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca làm việc đã lên lịch cho một nhân viên."""

    shift_id: str
    employee_id: Optional[str]
    company_id: Optional[str]
    start_time: datetime
    end_time: datetime
    status: str = ShiftStatus.SCHEDULED.value
    is_missed: bool = False
    missed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    department_id: Optional[str] = None
    break_minutes: int = 0
    hourly_rate: Optional[float] = None
    notes: Optional[str] = None
    replacement_employee_id: Optional[str] = None

    @property
    def duration_hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600

    @classmethod
    def from_payload(cls, row: Dict[str, Any], *, tz: Optional[tzinfo] = None) -> "Shift":
        start = parse_instant(row.get("start_time"), tz)
        end = parse_instant(row.get("end_time"), tz)
        if start is None or end is None:
            raise ValueError(f"Shift {row.get('id')!r} has no start/end time")
        return cls(
            shift_id=str(row["id"]),
            employee_id=pick_ref(row, "employee_id", "employee"),
            company_id=pick_ref(row, "company_id", "company"),
            start_time=start,
            end_time=end,
            status=str(row.get("status") or ShiftStatus.SCHEDULED.value),
            is_missed=bool(row.get("is_missed")),
            missed_at=parse_instant(row.get("missed_at"), tz),
            created_at=parse_instant(row.get("created_at"), tz),
            department_id=pick_ref(row, "department_id", "department"),
            break_minutes=int(row.get("break_minutes") or 0),
            hourly_rate=optional_float(row.get("hourly_rate")),
            notes=row.get("notes") or None,
            replacement_employee_id=pick_ref(row, "replacement_employee_id", "replacement_employee"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.shift_id,
            "employee_id": self.employee_id,
            "company_id": self.company_id,
            "department_id": self.department_id,
            "start_time": to_iso(self.start_time),
            "end_time": to_iso(self.end_time),
            "status": self.status,
            "is_missed": self.is_missed,
            "missed_at": to_iso(self.missed_at),
            "break_minutes": self.break_minutes,
        }


@dataclass(frozen=True)
class ShiftDraft:
    """Payload for creating a shift (no id yet)."""

    employee_id: str
    company_id: str
    start_time: datetime
    end_time: datetime
    department_id: Optional[str] = None
    break_minutes: int = DEFAULT_BREAK_MINUTES
    hourly_rate: Optional[float] = None
    notes: Optional[str] = None
    status: str = ShiftStatus.SCHEDULED.value

    def to_payload(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "employee_id": self.employee_id,
            "company_id": self.company_id,
            "start_time": to_iso(self.start_time),
            "end_time": to_iso(self.end_time),
            "break_minutes": self.break_minutes,
            "status": self.status,
        }
        if self.department_id:
            body["department_id"] = self.department_id
        if self.hourly_rate is not None:
            body["hourly_rate"] = self.hourly_rate
        if self.notes:
            body["notes"] = self.notes
        return to_backend_payload(body)


@dataclass(frozen=True)
class Slot:
    """Named hour range on the schedule grid; end < start means overnight."""

    slot_id: str
    name: str
    start_hour: int
    end_hour: int

    def __post_init__(self):
        require_hour(self.start_hour, "start_hour")
        require_hour(self.end_hour, "end_hour")
        if int(self.start_hour) == int(self.end_hour):
            raise ValidationError(f"Slot {self.slot_id!r} must not start and end at the same hour")

    @property
    def is_overnight(self) -> bool:
        return self.end_hour < self.start_hour

    def contains_hour(self, hour: int) -> bool:
        if self.end_hour > self.start_hour:
            return self.start_hour <= hour < self.end_hour
        return hour >= self.start_hour or hour < self.end_hour

    @property
    def label(self) -> str:
        return f"{self.start_hour}:00 - {self.end_hour}:00"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Slot":
        return cls(
            slot_id=str(raw.get("id") or raw.get("slot_id")),
            name=str(raw.get("name") or ""),
            start_hour=int(raw.get("startHour", raw.get("start_hour"))),
            end_hour=int(raw.get("endHour", raw.get("end_hour"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.slot_id,
            "name": self.name,
            "start_hour": self.start_hour,
            "end_hour": self.end_hour,
            "time": self.label,
        }


DEFAULT_SLOTS = (
    Slot(slot_id="morning", name="Morning Shift", start_hour=6, end_hour=14),
    Slot(slot_id="afternoon", name="Afternoon Shift", start_hour=14, end_hour=22),
    Slot(slot_id="night", name="Night Shift", start_hour=22, end_hour=6),
)


@dataclass(frozen=True)
class TemplateEntry:
    """One line of a saved week schedule (day_index 0 = Monday)."""

    employee_id: str
    day_index: int
    start_hour: int
    end_hour: int
    slot_id: Optional[str] = None
    break_minutes: int = 0
    hourly_rate: Optional[float] = None
    department_id: Optional[str] = None


@dataclass
class MissedSweepResult:
    flagged: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"flagged": self.flagged, "skipped": self.skipped, "failed": self.failed}


@dataclass(frozen=True)
class MissedShiftProgress:
    """A missed shift plus the replacement employee's time clock evidence."""

    shift: Shift
    replacement_record: Optional[TimeClockRecord] = None

    @property
    def status(self) -> str:
        record = self.replacement_record
        if record is None:
            return self.shift.status
        if record.clock_out is not None:
            return ShiftStatus.COMPLETED.value
        return ShiftStatus.IN_PROGRESS.value

    def to_dict(self) -> Dict[str, Any]:
        body = self.shift.to_dict()
        record = self.replacement_record
        body["status"] = self.status
        body["replacement_employee_id"] = self.shift.replacement_employee_id
        body["replacement_clock_in"] = to_iso(record.clock_in) if record else None
        body["replacement_clock_out"] = to_iso(record.clock_out) if record else None
        return body
