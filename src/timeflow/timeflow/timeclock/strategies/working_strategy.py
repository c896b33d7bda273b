from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import whole_seconds
from ...core.enums import AttendanceState
from ..model import TimeClockRecord
from .base import ElapsedReading, ElapsedStrategy


class WorkingStrategy(ElapsedStrategy):
    """Open record, no open break: (now - clock_in) - breaks, not below 0."""

    def read(self, *, record: Optional[TimeClockRecord], now: datetime, total_break_seconds: int) -> ElapsedReading:
        elapsed = whole_seconds(now - record.clock_in) - total_break_seconds
        return ElapsedReading(state=AttendanceState.WORKING, elapsed_seconds=max(elapsed, 0))
