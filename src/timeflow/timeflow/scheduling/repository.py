from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Sequence

from .model import Shift, ShiftDraft


class ShiftRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def create(self, draft: ShiftDraft) -> Shift:
        raise NotImplementedError

    def update(self, shift_id: str, fields: Dict[str, Any]) -> Optional[Shift]:
        """Partial update (PATCH). Returns the updated shift when the backend echoes it."""

        raise NotImplementedError

    def delete(self, shift_id: str) -> None:
        raise NotImplementedError
