from __future__ import annotations

from enum import Enum


class AttendanceState(str, Enum):
    """Trạng thái chấm công suy ra từ các mốc thời gian của bản ghi."""

    IDLE = "idle"
    WORKING = "working"
    ON_BREAK = "on_break"
    FINISHED = "finished"


class ShiftStatus(str, Enum):
    """Shift status values used by the scheduler backend."""

    SCHEDULED = "scheduled"
    MISSED = "missed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
