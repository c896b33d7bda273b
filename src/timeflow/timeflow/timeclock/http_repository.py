from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, Optional, Sequence

from ..api.client import ApiClient
from ..api.rest_base import ensure_list
from .model import TimeClockRecord
from .repository import TimeClockRepository

logger = logging.getLogger(__name__)

TIME_CLOCK_PATH = "/scheduler/time-clock/"


class HttpTimeClockRepository(TimeClockRepository):
    def __init__(self, client: ApiClient, *, tz: Optional[tzinfo] = None):
        self._client = client
        self._tz = tz

    def _records(self, payload: Any) -> list[TimeClockRecord]:
        out = []
        for row in ensure_list(payload):
            if not isinstance(row, dict):
                logger.warning("skipping non-object time clock row %r", row)
                continue
            try:
                rec = TimeClockRecord.from_payload(row, tz=self._tz)
            except (KeyError, TypeError, ValueError):
                logger.warning("skipping malformed time clock row id=%r", row.get("id"))
                continue
            if rec:
                out.append(rec)
        return out

    def _record(self, payload: Any) -> Optional[TimeClockRecord]:
        if not isinstance(payload, dict):
            return None
        try:
            return TimeClockRecord.from_payload(payload, tz=self._tz)
        except (KeyError, TypeError, ValueError):
            logger.warning("unusable time clock response id=%r", payload.get("id"))
            return None

    def list_for_employee(self, employee_id: str) -> Sequence[TimeClockRecord]:
        return self._records(self._client.get(TIME_CLOCK_PATH, {"employee": employee_id}))

    def list_for_shift(self, shift_id: str, *, employee_id: Optional[str] = None) -> Sequence[TimeClockRecord]:
        params = {"shift": shift_id, "employee": employee_id}
        return self._records(self._client.get(TIME_CLOCK_PATH, params))

    def clock_in(self, *, employee_id: str, shift_id: Optional[str] = None) -> Optional[TimeClockRecord]:
        body = {"employee_id": employee_id}
        if shift_id:
            body["shift_id"] = shift_id
        return self._record(self._client.post(f"{TIME_CLOCK_PATH}clock_in/", body))

    def clock_out(self, *, employee_id: str, record_id: str) -> Optional[TimeClockRecord]:
        body = {"employee_id": employee_id, "time_clock_id": record_id}
        return self._record(self._client.post(f"{TIME_CLOCK_PATH}clock_out/", body))

    def start_break(self, *, record_id: str) -> Optional[TimeClockRecord]:
        return self._record(self._client.post(f"{TIME_CLOCK_PATH}{record_id}/start_break/"))

    def end_break(self, *, record_id: str) -> Optional[TimeClockRecord]:
        return self._record(self._client.post(f"{TIME_CLOCK_PATH}{record_id}/end_break/"))
