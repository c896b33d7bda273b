from __future__ import annotations

import math
from datetime import datetime

from ...common.datetime_utils import whole_seconds
from ...timeclock.model import TimeClockRecord
from .base import DurationCalculator


class StandardDurationCalculator(DurationCalculator):
    """Standard rule: backend total_hours wins; else (out or now) - in - break, not below 0.

    An open break accrues against now; open records accrue against now.
    """

    def break_seconds(self, record: TimeClockRecord, *, now: datetime) -> int:
        if record.break_start is None:
            return 0
        end = record.break_end or now
        return max(whole_seconds(end - record.break_start), 0)

    def worked_seconds(self, record: TimeClockRecord, *, now: datetime) -> int:
        if record.total_hours is not None and record.total_hours > 0:
            return int(math.floor(record.total_hours * 3600 + 0.5))

        end = record.clock_out or now
        seconds = whole_seconds(end - record.clock_in) - self.break_seconds(record, now=now)
        return max(seconds, 0)
