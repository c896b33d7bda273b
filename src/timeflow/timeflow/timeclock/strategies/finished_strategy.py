from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import whole_seconds
from ...core.enums import AttendanceState
from ..model import TimeClockRecord
from .base import ElapsedReading, ElapsedStrategy


class FinishedStrategy(ElapsedStrategy):
    """Closed record: final totals, independent of now."""

    def read(self, *, record: Optional[TimeClockRecord], now: datetime, total_break_seconds: int) -> ElapsedReading:
        elapsed = whole_seconds(record.clock_out - record.clock_in) - total_break_seconds
        return ElapsedReading(state=AttendanceState.FINISHED, elapsed_seconds=max(elapsed, 0))
