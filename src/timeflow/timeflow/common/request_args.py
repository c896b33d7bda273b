from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_instant, parse_iso_date


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from e


def required_instant(value: Any, field_name: str, tz: Optional[tzinfo] = None) -> datetime:
    try:
        parsed = parse_instant(value, tz)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} must be an ISO-8601 timestamp") from e
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed
