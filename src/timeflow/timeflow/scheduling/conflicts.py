from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import local_date
from .model import Shift


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open overlap: touching endpoints do not overlap."""
    return a_start < b_end and b_start < a_end


def shifts_conflict(a: Shift, b: Shift, *, tz: Optional[tzinfo] = None) -> bool:
    """Same employee, same start day, overlapping intervals."""

    if a.employee_id is None or a.employee_id != b.employee_id:
        return False
    if local_date(a.start_time, tz) != local_date(b.start_time, tz):
        return False
    return intervals_overlap(a.start_time, a.end_time, b.start_time, b.end_time)


def find_conflict(
    roster: Iterable[Shift],
    *,
    employee_id: str,
    start: datetime,
    end: datetime,
    exclude_shift_id: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> Optional[Shift]:
    """First shift in ``roster`` that a proposed [start, end) for ``employee_id`` would collide with."""

    day = local_date(start, tz)
    for shift in roster:
        if exclude_shift_id is not None and shift.shift_id == exclude_shift_id:
            continue
        if shift.employee_id != employee_id:
            continue
        if local_date(shift.start_time, tz) != day:
            continue
        if intervals_overlap(start, end, shift.start_time, shift.end_time):
            return shift
    return None
