from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...common.datetime_utils import whole_seconds
from ...core.enums import AttendanceState
from ..model import TimeClockRecord


@dataclass(frozen=True)
class ElapsedReading:
    state: AttendanceState
    elapsed_seconds: int
    break_seconds: int = 0


def closed_break_seconds(record: Optional[TimeClockRecord]) -> int:
    if not record or not record.break_start or not record.break_end:
        return 0
    return max(whole_seconds(record.break_end - record.break_start), 0)


class ElapsedStrategy(ABC):
    """Strategy Pattern: encapsulate how elapsed time is read for one state.

    Readings are recomputed from timestamps on every call, never incremented.
    """

    @abstractmethod
    def read(self, *, record: Optional[TimeClockRecord], now: datetime, total_break_seconds: int) -> ElapsedReading:
        raise NotImplementedError
