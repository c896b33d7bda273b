from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from timeflow.core.exceptions import InvalidState, ShiftConflictError, ValidationError
from timeflow.scheduling.model import Shift, TemplateEntry
from timeflow.scheduling.service import ScheduleService

from .fakes import InMemoryShifts

UTC = timezone.utc


def at(hour: int, day: int = 6) -> datetime:
    return datetime(2025, 1, day, hour, tzinfo=UTC)


def _service(shifts=None):
    repo = InMemoryShifts(shifts)
    return ScheduleService(repo, tz=UTC), repo


def test_create_shift_checks_same_day_overlap():
    svc, repo = _service([Shift("a", "e1", "c1", at(9), at(13))])

    with pytest.raises(ShiftConflictError) as exc:
        svc.create_shift(employee_id="e1", company_id="c1", start_time=at(12), end_time=at(17))
    assert exc.value.conflicting.shift_id == "a"

    created = svc.create_shift(employee_id="e1", company_id="c1", start_time=at(13), end_time=at(17))
    assert created.shift_id in repo.shifts
    assert created.break_minutes == 30


def test_create_shift_validates_input():
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.create_shift(employee_id="e1", company_id="c1", start_time=at(17), end_time=at(9))
    with pytest.raises(InvalidState):
        svc.create_shift(employee_id=" ", company_id="c1", start_time=at(9), end_time=at(17))


def test_create_in_overnight_slot_ends_next_day():
    svc, _ = _service()
    shift = svc.create_in_slot(employee_id="e1", company_id="c1", day=date(2025, 1, 6), slot_id="night")
    assert shift.start_time == at(22)
    assert shift.end_time == at(6, day=7)

    with pytest.raises(ValidationError):
        svc.create_in_slot(employee_id="e1", company_id="c1", day=date(2025, 1, 6), slot_id="evening")


def test_move_shift_excludes_itself_from_conflict_check():
    svc, repo = _service([Shift("a", "e1", "c1", at(9), at(13)), Shift("b", "e2", "c1", at(9), at(17))])

    moved = svc.move_shift("a", start_time=at(10), end_time=at(14))
    assert moved.start_time == at(10)
    assert repo.shifts["a"].end_time == at(14)

    with pytest.raises(ShiftConflictError):
        svc.move_shift("a", start_time=at(10), end_time=at(14), employee_id="e2")

    with pytest.raises(ValidationError):
        svc.move_shift("missing", start_time=at(10), end_time=at(14))


def test_move_to_slot_and_delete():
    svc, repo = _service([Shift("a", "e1", "c1", at(9), at(13))])
    moved = svc.move_to_slot("a", day=date(2025, 1, 7), slot_id="afternoon")
    assert (moved.start_time, moved.end_time) == (at(14, day=7), at(22, day=7))

    svc.delete_shift("a")
    assert "a" not in repo.shifts


def test_slot_grid_for_week():
    svc, _ = _service(
        [
            Shift("a", "e1", "c1", at(7), at(15)),
            Shift("b", "e2", "c1", at(23, day=8), at(7, day=9)),
            Shift("c", "e3", "c2", at(7), at(15)),
        ]
    )
    grid = svc.slot_grid(week_of=date(2025, 1, 9), company_id="c1")

    assert list(grid) == [date(2025, 1, d) for d in range(6, 13)]
    assert [s.shift_id for s in grid[date(2025, 1, 6)]["morning"]] == ["a"]
    assert [s.shift_id for s in grid[date(2025, 1, 8)]["night"]] == ["b"]


def test_planned_hours_net_of_breaks():
    shifts = [
        Shift("a", "e1", "c1", at(9), at(17), break_minutes=30),
        Shift("b", "e1", "c1", at(9, day=7), at(13, day=7)),
    ]
    assert ScheduleService.planned_hours(shifts) == 11.5


def test_template_round_trip_into_next_week():
    svc, repo = _service(
        [
            Shift("a", "e1", "c1", at(6), at(14), break_minutes=15),
            Shift("b", "e2", "c1", at(22, day=8), at(6, day=9)),
        ]
    )
    entries = svc.snapshot_template(week_of=date(2025, 1, 6), company_id="c1")
    assert [(e.employee_id, e.day_index, e.slot_id) for e in entries] == [("e1", 0, "morning"), ("e2", 2, "night")]

    created = svc.apply_template(entries, company_id="c1", week_of=date(2025, 1, 13))
    assert [(s.start_time, s.end_time) for s in created] == [
        (at(6, day=13), at(14, day=13)),
        (at(22, day=15), at(6, day=16)),
    ]
    assert created[0].break_minutes == 15
    assert len(repo.shifts) == 4


def test_apply_template_can_replace_existing_week():
    svc, repo = _service([Shift("old", "e9", "c1", at(8, day=13), at(12, day=13))])
    entries = svc.snapshot_template(week_of=date(2025, 1, 13), company_id="c1")

    svc.apply_template(entries, company_id="c1", week_of=date(2025, 1, 13), replace_existing=True)

    assert "old" not in repo.shifts
    assert len(repo.shifts) == 1


def test_conflicting_template_leaves_existing_week_untouched():
    svc, repo = _service([Shift("old", "e9", "c1", at(8, day=13), at(12, day=13))])
    entries = [
        TemplateEntry("e1", day_index=0, start_hour=9, end_hour=13),
        TemplateEntry("e1", day_index=0, start_hour=12, end_hour=17),
    ]

    with pytest.raises(ShiftConflictError):
        svc.apply_template(entries, company_id="c1", week_of=date(2025, 1, 13), replace_existing=True)

    assert set(repo.shifts) == {"old"}


def test_template_conflicts_with_other_company_shift_are_caught_before_writing():
    svc, repo = _service([Shift("x", "e1", "c2", at(10, day=13), at(11, day=13))])
    entries = [
        TemplateEntry("e2", day_index=0, start_hour=9, end_hour=13),
        TemplateEntry("e1", day_index=0, start_hour=9, end_hour=13),
    ]

    with pytest.raises(ShiftConflictError) as exc:
        svc.apply_template(entries, company_id="c1", week_of=date(2025, 1, 13))

    assert exc.value.conflicting.shift_id == "x"
    assert set(repo.shifts) == {"x"}


def test_plan_template_does_not_write():
    svc, repo = _service([Shift("old", "e9", "c1", at(8, day=13), at(12, day=13))])
    entries = [TemplateEntry("e1", day_index=1, start_hour=9, end_hour=13)]

    to_delete, drafts = svc.plan_template(entries, company_id="c1", week_of=date(2025, 1, 13), replace_existing=True)

    assert [s.shift_id for s in to_delete] == ["old"]
    assert [(d.employee_id, d.start_time) for d in drafts] == [("e1", at(9, day=14))]
    assert set(repo.shifts) == {"old"}
