from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional

from ..api.rest_base import optional_float, pick_ref
from ..common.datetime_utils import parse_instant, to_iso
from ..core.enums import AttendanceState


@dataclass(frozen=True)
class TimeClockRecord:
    """Thực thể miền (domain): Một bản ghi chấm công liên tục (clock-in → clock-out)."""

    record_id: str
    employee_id: Optional[str]
    clock_in: datetime
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    shift_id: Optional[str] = None
    total_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    notes: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def on_break(self) -> bool:
        return self.break_start is not None and self.break_end is None

    @classmethod
    def from_payload(cls, row: Dict[str, Any], *, tz: Optional[tzinfo] = None) -> Optional["TimeClockRecord"]:
        """Build from an API row; rows without ``clock_in`` are not records yet."""

        clock_in = parse_instant(row.get("clock_in"), tz)
        if clock_in is None or row.get("id") in (None, ""):
            return None
        return cls(
            record_id=str(row["id"]),
            employee_id=pick_ref(row, "employee_id", "employee"),
            clock_in=clock_in,
            clock_out=parse_instant(row.get("clock_out"), tz),
            break_start=parse_instant(row.get("break_start"), tz),
            break_end=parse_instant(row.get("break_end"), tz),
            shift_id=pick_ref(row, "shift_id", "shift"),
            total_hours=optional_float(row.get("total_hours")),
            overtime_hours=optional_float(row.get("overtime_hours")),
            notes=row.get("notes") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "shift_id": self.shift_id,
            "clock_in": to_iso(self.clock_in),
            "clock_out": to_iso(self.clock_out),
            "break_start": to_iso(self.break_start),
            "break_end": to_iso(self.break_end),
            "total_hours": self.total_hours,
        }


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-model for the clock screen at one instant."""

    state: AttendanceState
    record: Optional[TimeClockRecord]
    elapsed_seconds: int
    break_seconds: int
    total_break_seconds: int

    @property
    def is_live(self) -> bool:
        return self.state in (AttendanceState.WORKING, AttendanceState.ON_BREAK)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "record": self.record.to_dict() if self.record else None,
            "elapsed_seconds": self.elapsed_seconds,
            "break_seconds": self.break_seconds,
            "total_break_seconds": self.total_break_seconds,
        }
