from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..common.datetime_utils import day_bounds, local_date, to_iso, week_dates, week_start
from ..common.validators import require_identifier
from ..core.constants import DEFAULT_BREAK_MINUTES
from ..core.exceptions import ShiftConflictError, ValidationError
from .conflicts import find_conflict
from .model import DEFAULT_SLOTS, Shift, ShiftDraft, Slot, TemplateEntry
from .repository import ShiftRepository
from .slots import build_slot_grid, find_slot, slot_interval, validate_slots
from .templates import materialize, snapshot_week

logger = logging.getLogger(__name__)


class ScheduleService:
    """Create/move/delete shifts with a same-day double-booking check.

    The check runs against a freshly fetched roster right before the write;
    the backend stays the final arbiter for concurrent editors.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        slots: Sequence[Slot] = DEFAULT_SLOTS,
        tz: Optional[tzinfo] = None,
        default_break_minutes: int = DEFAULT_BREAK_MINUTES,
    ):
        self._shifts = shifts
        self._slots = validate_slots(slots)
        self._tz = tz
        self._default_break_minutes = default_break_minutes

    @property
    def slots(self) -> tuple[Slot, ...]:
        return self._slots

    def roster(
        self,
        *,
        start: date,
        end: date,
        company_id: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> List[Shift]:
        if end < start:
            raise ValidationError("end date must not be before start date")
        lower, _ = day_bounds(start, self._tz)
        _, upper = day_bounds(end, self._tz)
        shifts = self._shifts.list_shifts(
            company_id=company_id,
            employee_id=employee_id,
            start=lower,
            end=upper,
        )
        return sorted(shifts, key=lambda s: s.start_time)

    def find_conflict(
        self,
        employee_id: str,
        start_time: datetime,
        end_time: datetime,
        *,
        exclude_shift_id: Optional[str] = None,
    ) -> Optional[Shift]:
        day = local_date(start_time, self._tz)
        roster = self._shifts.list_shifts(
            employee_id=employee_id,
            start=day_bounds(day - timedelta(days=1), self._tz)[0],
            end=day_bounds(day + timedelta(days=1), self._tz)[1],
        )
        return find_conflict(
            roster,
            employee_id=employee_id,
            start=start_time,
            end=end_time,
            exclude_shift_id=exclude_shift_id,
            tz=self._tz,
        )

    def _ensure_free(
        self,
        employee_id: str,
        start_time: datetime,
        end_time: datetime,
        *,
        exclude_shift_id: Optional[str] = None,
    ) -> None:
        if end_time <= start_time:
            raise ValidationError("Shift end must be after its start")
        conflict = self.find_conflict(employee_id, start_time, end_time, exclude_shift_id=exclude_shift_id)
        if conflict is not None:
            raise ShiftConflictError(
                f"Employee {employee_id} already has shift {conflict.shift_id} "
                f"from {conflict.start_time:%H:%M} to {conflict.end_time:%H:%M} on that day",
                conflicting=conflict,
            )

    def create_shift(
        self,
        *,
        employee_id: Optional[str],
        company_id: Optional[str],
        start_time: datetime,
        end_time: datetime,
        department_id: Optional[str] = None,
        break_minutes: Optional[int] = None,
        hourly_rate: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> Shift:
        employee_id = require_identifier(employee_id, "employee")
        company_id = require_identifier(company_id, "company")
        self._ensure_free(employee_id, start_time, end_time)

        draft = ShiftDraft(
            employee_id=employee_id,
            company_id=company_id,
            start_time=start_time,
            end_time=end_time,
            department_id=department_id,
            break_minutes=self._default_break_minutes if break_minutes is None else int(break_minutes),
            hourly_rate=hourly_rate,
            notes=notes,
        )
        shift = self._shifts.create(draft)
        logger.info("shift %s created for employee=%s %s", shift.shift_id, employee_id, to_iso(start_time))
        return shift

    def create_in_slot(
        self,
        *,
        employee_id: Optional[str],
        company_id: Optional[str],
        day: date,
        slot_id: str,
        department_id: Optional[str] = None,
        break_minutes: Optional[int] = None,
        hourly_rate: Optional[float] = None,
    ) -> Shift:
        start, end = slot_interval(find_slot(self._slots, slot_id), day, tz=self._tz)
        return self.create_shift(
            employee_id=employee_id,
            company_id=company_id,
            start_time=start,
            end_time=end,
            department_id=department_id,
            break_minutes=break_minutes,
            hourly_rate=hourly_rate,
        )

    def _require_shift(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(require_identifier(shift_id, "shift"))
        if shift is None:
            raise ValidationError(f"Shift {shift_id} not found")
        return shift

    def move_shift(
        self,
        shift_id: str,
        *,
        start_time: datetime,
        end_time: datetime,
        employee_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> Shift:
        """Reschedule (and optionally reassign) a shift, ignoring its own current slot."""

        existing = self._require_shift(shift_id)
        target = require_identifier(employee_id or existing.employee_id, "employee")
        self._ensure_free(target, start_time, end_time, exclude_shift_id=existing.shift_id)

        fields: Dict[str, Any] = {
            "employee_id": target,
            "start_time": to_iso(start_time),
            "end_time": to_iso(end_time),
        }
        if department_id is not None:
            fields["department_id"] = department_id
        updated = self._shifts.update(existing.shift_id, fields)
        logger.info("shift %s moved to employee=%s %s", existing.shift_id, target, to_iso(start_time))
        if updated is not None:
            return updated
        return replace(
            existing,
            employee_id=target,
            start_time=start_time,
            end_time=end_time,
            department_id=department_id if department_id is not None else existing.department_id,
        )

    def move_to_slot(
        self,
        shift_id: str,
        *,
        day: date,
        slot_id: str,
        employee_id: Optional[str] = None,
    ) -> Shift:
        start, end = slot_interval(find_slot(self._slots, slot_id), day, tz=self._tz)
        return self.move_shift(shift_id, start_time=start, end_time=end, employee_id=employee_id)

    def delete_shift(self, shift_id: str) -> None:
        self._shifts.delete(require_identifier(shift_id, "shift"))
        logger.info("shift %s deleted", shift_id)

    @staticmethod
    def planned_hours(shifts: Iterable[Shift]) -> float:
        """Scheduled hours net of planned breaks."""
        total = 0.0
        for shift in shifts:
            total += max(shift.duration_hours - shift.break_minutes / 60, 0.0)
        return round(total, 2)

    def slot_grid(
        self,
        *,
        week_of: date,
        company_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> Dict[date, Dict[str, List[Shift]]]:
        days = week_dates(week_of)
        shifts = self.roster(start=days[0], end=days[-1], company_id=company_id)
        return build_slot_grid(shifts, days=days, slots=self._slots, tz=self._tz, department_id=department_id)

    def snapshot_template(self, *, week_of: date, company_id: Optional[str] = None) -> List[TemplateEntry]:
        days = week_dates(week_of)
        shifts = self.roster(start=days[0], end=days[-1], company_id=company_id)
        return snapshot_week(shifts, slots=self._slots, tz=self._tz)

    def plan_template(
        self,
        entries: Iterable[TemplateEntry],
        *,
        company_id: Optional[str],
        week_of: date,
        replace_existing: bool = False,
    ) -> Tuple[List[Shift], List[ShiftDraft]]:
        """Work out a template run without writing anything.

        Returns the shifts that would be deleted and the drafts that would be
        created. Every draft is checked against the roster that survives the
        deletion and against the drafts before it; the first clash raises
        ``ShiftConflictError``.
        """

        company_id = require_identifier(company_id, "company")
        days = week_dates(week_of)
        placed = materialize(entries, week_start=days[0], tz=self._tz)

        to_delete: List[Shift] = []
        if replace_existing:
            to_delete = self.roster(start=days[0], end=days[-1], company_id=company_id)
        deleted_ids = {s.shift_id for s in to_delete}

        rosters: Dict[str, List[Shift]] = {}
        drafts: List[ShiftDraft] = []
        for index, (entry, start, end) in enumerate(placed):
            employee_id = require_identifier(entry.employee_id, "employee")
            if employee_id not in rosters:
                fetched = self._shifts.list_shifts(
                    employee_id=employee_id,
                    start=day_bounds(days[0] - timedelta(days=1), self._tz)[0],
                    end=day_bounds(days[-1] + timedelta(days=1), self._tz)[1],
                )
                rosters[employee_id] = [s for s in fetched if s.shift_id not in deleted_ids]

            conflict = find_conflict(rosters[employee_id], employee_id=employee_id, start=start, end=end, tz=self._tz)
            if conflict is not None:
                raise ShiftConflictError(
                    f"Template entry for employee {employee_id} on {start:%Y-%m-%d %H:%M} "
                    f"clashes with shift {conflict.shift_id}",
                    conflicting=conflict,
                )

            draft = ShiftDraft(
                employee_id=employee_id,
                company_id=company_id,
                start_time=start,
                end_time=end,
                department_id=entry.department_id,
                break_minutes=int(entry.break_minutes),
                hourly_rate=entry.hourly_rate,
            )
            drafts.append(draft)
            rosters[employee_id].append(
                Shift(
                    shift_id=f"planned-{index}",
                    employee_id=employee_id,
                    company_id=company_id,
                    start_time=start,
                    end_time=end,
                )
            )
        return to_delete, drafts

    def apply_template(
        self,
        entries: Iterable[TemplateEntry],
        *,
        company_id: Optional[str],
        week_of: date,
        replace_existing: bool = False,
    ) -> List[Shift]:
        """Create the week's shifts from a template.

        Nothing is deleted or created unless the whole template fits.
        """

        to_delete, drafts = self.plan_template(
            entries,
            company_id=company_id,
            week_of=week_of,
            replace_existing=replace_existing,
        )
        for shift in to_delete:
            self._shifts.delete(shift.shift_id)

        created = [self._shifts.create(draft) for draft in drafts]
        logger.info(
            "template applied: %d shift(s) created, %d replaced for week of %s",
            len(created),
            len(to_delete),
            week_start(week_of),
        )
        return created
