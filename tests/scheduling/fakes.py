from __future__ import annotations

from dataclasses import replace
from typing import Optional

from timeflow.common.datetime_utils import parse_instant
from timeflow.core.exceptions import NetworkFailure
from timeflow.scheduling.model import Shift, ShiftDraft


class InMemoryShifts:
    def __init__(self, shifts: Optional[list[Shift]] = None):
        self.shifts: dict[str, Shift] = {s.shift_id: s for s in shifts or []}
        self.updates: list[tuple[str, dict]] = []
        self.fail_updates_for: set[str] = set()
        self._id = 1000

    def list_shifts(self, *, employee_id=None, company_id=None, start=None, end=None, status=None, is_missed=None):
        out = []
        for s in self.shifts.values():
            if employee_id is not None and s.employee_id != employee_id:
                continue
            if company_id is not None and s.company_id != company_id:
                continue
            if status is not None and s.status != status:
                continue
            if is_missed is not None and s.is_missed != is_missed:
                continue
            if start is not None and s.start_time < start:
                continue
            if end is not None and s.start_time >= end:
                continue
            out.append(s)
        return out

    def get_by_id(self, shift_id: str):
        return self.shifts.get(shift_id)

    def create(self, draft: ShiftDraft) -> Shift:
        self._id += 1
        shift = Shift(
            shift_id=str(self._id),
            employee_id=draft.employee_id,
            company_id=draft.company_id,
            start_time=draft.start_time,
            end_time=draft.end_time,
            department_id=draft.department_id,
            break_minutes=draft.break_minutes,
            hourly_rate=draft.hourly_rate,
            notes=draft.notes,
        )
        self.shifts[shift.shift_id] = shift
        return shift

    def update(self, shift_id: str, fields: dict):
        if shift_id in self.fail_updates_for:
            raise NetworkFailure("connection reset")
        self.updates.append((shift_id, dict(fields)))
        changes = dict(fields)
        for key in ("start_time", "end_time", "missed_at"):
            if key in changes:
                changes[key] = parse_instant(changes[key])
        shift = replace(self.shifts[shift_id], **changes)
        self.shifts[shift_id] = shift
        return shift

    def delete(self, shift_id: str) -> None:
        self.shifts.pop(shift_id, None)


class InMemoryTimeClock:
    def __init__(self, records=None):
        self.records = list(records or [])
        self.fail_for: set[str] = set()

    def list_for_shift(self, shift_id: str, *, employee_id=None):
        if shift_id in self.fail_for:
            raise NetworkFailure("timeout")
        return [
            r for r in self.records
            if r.shift_id == shift_id and (employee_id is None or r.employee_id == employee_id)
        ]
