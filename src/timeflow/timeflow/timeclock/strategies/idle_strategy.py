from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceState
from ..model import TimeClockRecord
from .base import ElapsedReading, ElapsedStrategy


class IdleStrategy(ElapsedStrategy):
    """Nothing to display until the next clock-in."""

    def read(self, *, record: Optional[TimeClockRecord], now: datetime, total_break_seconds: int) -> ElapsedReading:
        return ElapsedReading(state=AttendanceState.IDLE, elapsed_seconds=0)
