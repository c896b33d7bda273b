from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimeClockRecord


class TimeClockRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[TimeClockRecord]:
        raise NotImplementedError

    def list_for_shift(self, shift_id: str, *, employee_id: Optional[str] = None) -> Sequence[TimeClockRecord]:
        raise NotImplementedError

    def clock_in(self, *, employee_id: str, shift_id: Optional[str] = None) -> Optional[TimeClockRecord]:
        """Create the open record server-side.

        Returns None when the response does not carry a usable record.
        """

        raise NotImplementedError

    def clock_out(self, *, employee_id: str, record_id: str) -> Optional[TimeClockRecord]:
        raise NotImplementedError

    def start_break(self, *, record_id: str) -> Optional[TimeClockRecord]:
        raise NotImplementedError

    def end_break(self, *, record_id: str) -> Optional[TimeClockRecord]:
        raise NotImplementedError
