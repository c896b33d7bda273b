from __future__ import annotations

from typing import Any

from ..core.exceptions import InvalidState, ValidationError


def require_identifier(value: Any, field_name: str) -> str:
    """Opaque ids travel as strings; reject empty/whitespace values."""
    if value is None:
        raise InvalidState(f"{field_name} is required")
    text = str(value).strip()
    if not text:
        raise InvalidState(f"{field_name} is required")
    return text


def require_hour(value: Any, field_name: str) -> int:
    try:
        hour = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} must be an hour between 0 and 23") from e
    if not 0 <= hour <= 23:
        raise ValidationError(f"{field_name} must be an hour between 0 and 23")
    return hour
