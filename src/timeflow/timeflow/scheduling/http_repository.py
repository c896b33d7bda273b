from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional, Sequence

from ..api.client import ApiClient
from ..api.rest_base import ensure_list, to_backend_payload
from ..core.exceptions import RemoteRejected
from .model import Shift, ShiftDraft
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

SHIFTS_PATH = "/scheduler/shifts/"


class HttpShiftRepository(ShiftRepository):
    def __init__(self, client: ApiClient, *, tz: Optional[tzinfo] = None):
        self._client = client
        self._tz = tz

    def _shift(self, payload: Any) -> Optional[Shift]:
        if not isinstance(payload, dict) or not payload.get("id"):
            return None
        return Shift.from_payload(payload, tz=self._tz)

    def list_shifts(
        self,
        *,
        employee_id: Optional[str] = None,
        company_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[str] = None,
        is_missed: Optional[bool] = None,
    ) -> Sequence[Shift]:
        params = {
            "employee": employee_id,
            "company": company_id,
            "start_date": start,
            "end_date": end,
            "status": status,
            "is_missed": is_missed,
        }
        out = []
        for row in ensure_list(self._client.get(SHIFTS_PATH, params)):
            try:
                out.append(Shift.from_payload(row, tz=self._tz))
            except (KeyError, ValueError):
                logger.warning("skipping malformed shift row id=%r", row.get("id"))
        return out

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        try:
            return self._shift(self._client.get(f"{SHIFTS_PATH}{shift_id}/"))
        except RemoteRejected as e:
            if e.status_code == 404:
                return None
            raise

    def create(self, draft: ShiftDraft) -> Shift:
        created = self._shift(self._client.post(SHIFTS_PATH, draft.to_payload()))
        if created is None:
            raise RemoteRejected("Shift was not created")
        return created

    def update(self, shift_id: str, fields: Dict[str, Any]) -> Optional[Shift]:
        return self._shift(self._client.patch(f"{SHIFTS_PATH}{shift_id}/", to_backend_payload(fields)))

    def delete(self, shift_id: str) -> None:
        self._client.delete(f"{SHIFTS_PATH}{shift_id}/")
