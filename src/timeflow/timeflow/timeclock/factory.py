from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .model import TimeClockRecord
from .strategies.base import ElapsedStrategy
from .strategies.finished_strategy import FinishedStrategy
from .strategies.idle_strategy import IdleStrategy
from .strategies.on_break_strategy import OnBreakStrategy
from .strategies.working_strategy import WorkingStrategy


@dataclass
class ElapsedStrategyFactory:
    """Factory Pattern: choose the elapsed-time strategy from the record's timestamps."""

    def for_record(self, record: Optional[TimeClockRecord]) -> ElapsedStrategy:
        if record is None:
            return IdleStrategy()
        if record.clock_out is not None:
            return FinishedStrategy()
        if record.on_break:
            return OnBreakStrategy()
        return WorkingStrategy()
