from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional, Tuple

_ONE_SECOND = timedelta(seconds=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current instant (timezone-aware).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def localize(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Attach/convert to ``tz``; ``None`` means the system local zone."""
    if value.tzinfo is None:
        if tz is None:
            return value.astimezone()
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def parse_instant(value: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 boundary value into an aware datetime.

    Accepts ``datetime`` objects, ISO strings (with a trailing ``Z``) or empty
    values. Naive timestamps are interpreted in ``tz``.
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value if value.tzinfo else localize(value, tz)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from e
        return parsed if parsed.tzinfo else localize(parsed, tz)

    raise TypeError(f"Unsupported timestamp value type: {type(value)!r}")


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def whole_seconds(delta: timedelta) -> int:
    """Floor a duration to whole seconds."""
    return int(delta // _ONE_SECOND)


def local_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    return value.astimezone(tz).date()


def day_bounds(day: date, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """Return ``[start, end)`` instants of a local calendar day."""
    start = localize(datetime.combine(day, time.min), tz)
    end = localize(datetime.combine(day + timedelta(days=1), time.min), tz)
    return start, end


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_dates(day: date) -> list[date]:
    start = week_start(day)
    return [start + timedelta(days=i) for i in range(7)]


def at_hour(day: date, hour: int, tz: Optional[tzinfo] = None) -> datetime:
    return localize(datetime.combine(day, time(hour=hour)), tz)


def format_clock(seconds: int) -> str:
    """HH:MM:SS, used by the live clock."""
    seconds = max(int(seconds), 0)
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_hours_minutes(seconds: int) -> str:
    """H:MM, used by report totals."""
    seconds = max(int(seconds), 0)
    h, rem = divmod(seconds, 3600)
    return f"{h}:{rem // 60:02d}"


def format_duration_short(seconds: int) -> str:
    seconds = max(int(seconds), 0)
    h, rem = divmod(seconds, 3600)
    m = rem // 60
    if h and m:
        return f"{h}h {m}m"
    if h:
        return f"{h}h"
    if m:
        return f"{m}m"
    return f"{seconds}s"


def local_hour(value: datetime, tz: Optional[tzinfo] = None) -> int:
    return localize(value, tz).hour
