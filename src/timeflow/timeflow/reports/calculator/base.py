from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...timeclock.model import TimeClockRecord


class DurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for per-record durations)."""

    @abstractmethod
    def break_seconds(self, record: TimeClockRecord, *, now: datetime) -> int:
        raise NotImplementedError

    @abstractmethod
    def worked_seconds(self, record: TimeClockRecord, *, now: datetime) -> int:
        raise NotImplementedError
