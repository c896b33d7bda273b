from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional

from ..common.datetime_utils import now_utc, to_iso
from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES, DEFAULT_RECENT_CREATION_EXEMPT_HOURS
from ..core.enums import ShiftStatus
from ..core.exceptions import RemoteError
from ..timeclock.model import TimeClockRecord
from ..timeclock.repository import TimeClockRepository
from .model import MissedShiftProgress, MissedSweepResult, Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissedShiftPolicy:
    """When a scheduled shift counts as missed.

    - the grace period after ``start_time`` has fully elapsed
    - the shift was not created after its own start (retroactive entry)
    - the shift was not created within the recent-creation window
    - nobody clocked in against it
    """

    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES
    recent_creation_exempt_hours: int = DEFAULT_RECENT_CREATION_EXEMPT_HOURS

    @property
    def grace(self) -> timedelta:
        return timedelta(minutes=self.grace_minutes)

    def threshold(self, now: datetime) -> datetime:
        """Shifts starting before this instant are past their grace period."""
        return now - self.grace

    def is_overdue(self, shift: Shift, now: datetime) -> bool:
        return shift.start_time + self.grace < now

    def is_exempt(self, shift: Shift, now: datetime) -> bool:
        created = shift.created_at
        if created is None:
            return False
        if created > shift.start_time:
            return True
        return now - created < timedelta(hours=self.recent_creation_exempt_hours)

    def is_candidate(self, shift: Shift, now: datetime) -> bool:
        if shift.status != ShiftStatus.SCHEDULED or shift.is_missed:
            return False
        return self.is_overdue(shift, now) and not self.is_exempt(shift, now)

    @staticmethod
    def has_clock_in(shift: Shift, records: Iterable[TimeClockRecord]) -> bool:
        for record in records:
            if record.shift_id not in (None, shift.shift_id):
                continue
            if record.employee_id not in (None, shift.employee_id):
                continue
            if record.clock_in is not None:
                return True
        return False


class MissedShiftSweeper:
    """Flags overdue scheduled shifts nobody clocked in for."""

    def __init__(
        self,
        shifts: ShiftRepository,
        time_clock: TimeClockRepository,
        *,
        policy: Optional[MissedShiftPolicy] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._shifts = shifts
        self._time_clock = time_clock
        self._policy = policy or MissedShiftPolicy()
        self._clock = clock

    @property
    def policy(self) -> MissedShiftPolicy:
        return self._policy

    def sweep(self, *, now: Optional[datetime] = None, company_id: Optional[str] = None) -> MissedSweepResult:
        now = now or self._clock()
        result = MissedSweepResult()

        candidates = self._shifts.list_shifts(
            company_id=company_id,
            end=self._policy.threshold(now),
            status=ShiftStatus.SCHEDULED.value,
            is_missed=False,
        )

        for shift in candidates:
            if not self._policy.is_candidate(shift, now):
                result.skipped.append(shift.shift_id)
                continue
            try:
                records = self._time_clock.list_for_shift(shift.shift_id, employee_id=shift.employee_id)
                if self._policy.has_clock_in(shift, records):
                    result.skipped.append(shift.shift_id)
                    continue
                self._shifts.update(
                    shift.shift_id,
                    {
                        "is_missed": True,
                        "missed_at": to_iso(now),
                        "status": ShiftStatus.MISSED.value,
                    },
                )
            except RemoteError:
                logger.warning("missed-shift check failed for shift=%s", shift.shift_id, exc_info=True)
                result.failed.append(shift.shift_id)
                continue

            logger.info("shift %s flagged as missed (employee=%s)", shift.shift_id, shift.employee_id)
            result.flagged.append(shift.shift_id)

        if result.flagged:
            logger.info("missed-shift sweep flagged %d shift(s)", len(result.flagged))
        return result

    def list_missed(
        self,
        *,
        company_id: Optional[str] = None,
        exclude_employee_id: Optional[str] = None,
    ) -> List[MissedShiftProgress]:
        """Missed shifts with replacement progress read from the replacement's clock.

        ``exclude_employee_id`` hides the caller's own missed shifts (nobody
        replaces themselves).
        """

        out = []
        for shift in self._shifts.list_shifts(company_id=company_id, is_missed=True):
            if exclude_employee_id is not None and shift.employee_id == exclude_employee_id:
                continue
            out.append(MissedShiftProgress(shift=shift, replacement_record=self._replacement_record(shift)))
        return sorted(out, key=lambda p: p.shift.start_time)

    def _replacement_record(self, shift: Shift) -> Optional[TimeClockRecord]:
        replacement = shift.replacement_employee_id
        if not replacement:
            return None
        try:
            records = self._time_clock.list_for_shift(shift.shift_id, employee_id=replacement)
        except RemoteError:
            logger.warning("replacement clock lookup failed for shift=%s", shift.shift_id, exc_info=True)
            return None
        for record in records:
            if record.employee_id in (None, replacement) and record.clock_in is not None:
                return record
        return None
