from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Optional, Sequence, Tuple

from ..common.datetime_utils import at_hour, localize
from ..core.exceptions import ValidationError
from .model import Shift, Slot, TemplateEntry
from .slots import slot_for_shift


def snapshot_week(
    shifts: Iterable[Shift],
    *,
    slots: Sequence[Slot],
    tz: Optional[tzinfo] = None,
) -> List[TemplateEntry]:
    """Reduce a week of concrete shifts to reusable (weekday, hours) entries."""

    entries = []
    for shift in shifts:
        if not shift.employee_id:
            continue
        start = localize(shift.start_time, tz)
        end = localize(shift.end_time, tz)
        slot = slot_for_shift(slots, shift, tz=tz)
        entries.append(
            TemplateEntry(
                employee_id=shift.employee_id,
                day_index=start.weekday(),
                start_hour=start.hour,
                end_hour=end.hour,
                slot_id=slot.slot_id if slot else None,
                break_minutes=shift.break_minutes,
                hourly_rate=shift.hourly_rate,
                department_id=shift.department_id,
            )
        )
    return sorted(entries, key=lambda e: (e.day_index, e.start_hour, e.employee_id))


def materialize(
    entries: Iterable[TemplateEntry],
    *,
    week_start: date,
    tz: Optional[tzinfo] = None,
) -> List[Tuple[TemplateEntry, datetime, datetime]]:
    """Place template entries on the week beginning ``week_start``.

    An entry whose end hour is before its start hour ends on the next day.
    """

    out = []
    for entry in entries:
        if not 0 <= entry.day_index <= 6:
            raise ValidationError(f"day_index must be 0..6, got {entry.day_index}")
        if entry.start_hour == entry.end_hour:
            raise ValidationError("Template entry must not start and end at the same hour")
        day = week_start + timedelta(days=entry.day_index)
        start = at_hour(day, entry.start_hour, tz)
        end_day = day + timedelta(days=1) if entry.end_hour < entry.start_hour else day
        out.append((entry, start, at_hour(end_day, entry.end_hour, tz)))
    return out
