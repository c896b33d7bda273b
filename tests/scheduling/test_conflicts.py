from datetime import datetime, timezone

from timeflow.scheduling.conflicts import find_conflict, shifts_conflict
from timeflow.scheduling.model import Shift

UTC = timezone.utc


def at(hour: int, day: int = 6) -> datetime:
    return datetime(2025, 1, day, hour, tzinfo=UTC)


def shift(shift_id: str, start: int, end: int, employee: str = "e1", day: int = 6) -> Shift:
    return Shift(shift_id, employee, "c1", at(start, day), at(end, day))


def test_overlapping_same_day_conflicts():
    roster = [shift("a", 9, 13)]
    assert find_conflict(roster, employee_id="e1", start=at(12), end=at(17), tz=UTC).shift_id == "a"


def test_touching_endpoints_do_not_conflict():
    roster = [shift("a", 9, 13)]
    assert find_conflict(roster, employee_id="e1", start=at(13), end=at(17), tz=UTC) is None


def test_other_employee_or_other_day_never_conflicts():
    roster = [shift("a", 9, 13, employee="e2"), shift("b", 9, 13, day=7)]
    assert find_conflict(roster, employee_id="e1", start=at(10), end=at(11), tz=UTC) is None


def test_excluded_shift_does_not_conflict_with_itself():
    roster = [shift("a", 9, 13)]
    assert find_conflict(roster, employee_id="e1", start=at(10), end=at(14), exclude_shift_id="a", tz=UTC) is None


def test_conflict_is_symmetric():
    a, b, c = shift("a", 9, 13), shift("b", 12, 17), shift("c", 13, 17)
    assert shifts_conflict(a, b, tz=UTC) and shifts_conflict(b, a, tz=UTC)
    assert not shifts_conflict(a, c, tz=UTC) and not shifts_conflict(c, a, tz=UTC)
