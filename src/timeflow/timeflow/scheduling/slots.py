from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..common.datetime_utils import at_hour, local_date, local_hour
from ..core.exceptions import ValidationError
from .model import Shift, Slot


def validate_slots(slots: Sequence[Slot]) -> Tuple[Slot, ...]:
    """Reject empty layouts, duplicate ids and slots that claim the same hour."""

    if not slots:
        raise ValidationError("At least one slot is required")
    seen_ids = set()
    owner: Dict[int, str] = {}
    for slot in slots:
        if slot.slot_id in seen_ids:
            raise ValidationError(f"Duplicate slot id {slot.slot_id!r}")
        seen_ids.add(slot.slot_id)
        for hour in range(24):
            if not slot.contains_hour(hour):
                continue
            if hour in owner:
                raise ValidationError(
                    f"Slots {owner[hour]!r} and {slot.slot_id!r} both cover {hour}:00"
                )
            owner[hour] = slot.slot_id
    return tuple(slots)


def find_slot(slots: Iterable[Slot], slot_id: str) -> Slot:
    for slot in slots:
        if slot.slot_id == slot_id:
            return slot
    raise ValidationError(f"Unknown slot {slot_id!r}")


def slot_for_hour(slots: Iterable[Slot], hour: int) -> Optional[Slot]:
    for slot in slots:
        if slot.contains_hour(hour):
            return slot
    return None


def slot_for_shift(slots: Iterable[Slot], shift: Shift, *, tz: Optional[tzinfo] = None) -> Optional[Slot]:
    return slot_for_hour(slots, local_hour(shift.start_time, tz))


def slot_interval(slot: Slot, day: date, *, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """Concrete [start, end) of a slot on ``day``; overnight slots end on the next day."""

    start = at_hour(day, slot.start_hour, tz)
    end_day = day + timedelta(days=1) if slot.is_overnight else day
    return start, at_hour(end_day, slot.end_hour, tz)


def shifts_in_slot(
    shifts: Iterable[Shift],
    *,
    day: date,
    slot: Slot,
    tz: Optional[tzinfo] = None,
    department_id: Optional[str] = None,
) -> List[Shift]:
    out = []
    for shift in shifts:
        if department_id and shift.department_id != department_id:
            continue
        if local_date(shift.start_time, tz) != day:
            continue
        if slot.contains_hour(local_hour(shift.start_time, tz)):
            out.append(shift)
    return sorted(out, key=lambda s: s.start_time)


def build_slot_grid(
    shifts: Sequence[Shift],
    *,
    days: Iterable[date],
    slots: Sequence[Slot],
    tz: Optional[tzinfo] = None,
    department_id: Optional[str] = None,
) -> Dict[date, Dict[str, List[Shift]]]:
    """day -> slot id -> shifts starting in that slot on that day."""

    grid: Dict[date, Dict[str, List[Shift]]] = {}
    for day in days:
        grid[day] = {
            slot.slot_id: shifts_in_slot(shifts, day=day, slot=slot, tz=tz, department_id=department_id)
            for slot in slots
        }
    return grid


