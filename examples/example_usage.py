"""Ví dụ: dùng service layer (không qua Flask).

Controllers are a thin layer; the clock session and the report aggregator
can be driven directly.
"""

import importlib

from config import get_settings_module

from timeflow.common.datetime_utils import format_clock, format_hours_minutes
from timeflow.container import build_container
from timeflow.main import resolve_timezone


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        api_config=settings.API_CONFIG,
        tz=resolve_timezone(getattr(settings, "TIMEZONE", "")),
    )

    snapshot = container.time_clock_service.current("1")
    print(snapshot.state.value, format_clock(snapshot.elapsed_seconds))

    week = container.report_service.weekly_for_employee("1")
    print("this week:", format_hours_minutes(week.worked_seconds), f"({week.days_worked} days)")


if __name__ == "__main__":
    main()
