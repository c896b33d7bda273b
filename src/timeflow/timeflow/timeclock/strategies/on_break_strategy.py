from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import whole_seconds
from ...core.enums import AttendanceState
from ..model import TimeClockRecord
from .base import ElapsedReading, ElapsedStrategy


class OnBreakStrategy(ElapsedStrategy):
    """Break in progress: work time stays frozen at the break start."""

    def read(self, *, record: Optional[TimeClockRecord], now: datetime, total_break_seconds: int) -> ElapsedReading:
        frozen = whole_seconds(record.break_start - record.clock_in) - total_break_seconds
        on_break = whole_seconds(now - record.break_start)
        return ElapsedReading(
            state=AttendanceState.ON_BREAK,
            elapsed_seconds=max(frozen, 0),
            break_seconds=max(on_break, 0),
        )
