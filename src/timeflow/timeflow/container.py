from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, Optional

from .api.client import ApiClient, ApiConfig
from .common.datetime_utils import now_utc
from .core.constants import (
    DEFAULT_GRACE_PERIOD_MINUTES,
    DEFAULT_RECENT_CREATION_EXEMPT_HOURS,
    DEFAULT_TICK_INTERVAL_SECONDS,
)
from .reports.service import AttendanceReportService
from .scheduling.http_repository import HttpShiftRepository
from .scheduling.missed import MissedShiftPolicy, MissedShiftSweeper
from .scheduling.repository import ShiftRepository
from .scheduling.service import ScheduleService
from .timeclock.http_repository import HttpTimeClockRepository
from .timeclock.repository import TimeClockRepository
from .timeclock.service import TimeClockService


@dataclass(frozen=True)
class Container:
    tz: Optional[tzinfo]
    clock: Callable[[], datetime]

    time_clock_repo: TimeClockRepository
    shifts_repo: ShiftRepository

    time_clock_service: TimeClockService
    report_service: AttendanceReportService
    schedule_service: ScheduleService
    missed_shift_sweeper: MissedShiftSweeper


def build_container(
    *,
    api_config: Optional[dict] = None,
    tz: Optional[tzinfo] = None,
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    recent_creation_exempt_hours: int = DEFAULT_RECENT_CREATION_EXEMPT_HOURS,
    tick_interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
    time_clock_repo: Optional[TimeClockRepository] = None,
    shifts_repo: Optional[ShiftRepository] = None,
    clock: Callable[[], datetime] = now_utc,
) -> Container:
    """Wire repositories and services; pass repositories to skip the HTTP layer."""

    if time_clock_repo is None or shifts_repo is None:
        if not api_config or not api_config.get("base_url"):
            raise ValueError("API_CONFIG.base_url is required when repositories are not supplied")
        client = ApiClient.get_instance(
            ApiConfig(
                base_url=str(api_config["base_url"]),
                token=api_config.get("token") or None,
                timeout=float(api_config.get("timeout") or 20),
            )
        )
        time_clock_repo = time_clock_repo or HttpTimeClockRepository(client, tz=tz)
        shifts_repo = shifts_repo or HttpShiftRepository(client, tz=tz)

    time_clock_service = TimeClockService(time_clock_repo, tz=tz, clock=clock, tick_interval=tick_interval)
    report_service = AttendanceReportService(time_clock_repo, tz=tz, clock=clock)
    schedule_service = ScheduleService(shifts_repo, tz=tz)
    missed_shift_sweeper = MissedShiftSweeper(
        shifts_repo,
        time_clock_repo,
        policy=MissedShiftPolicy(
            grace_minutes=grace_minutes,
            recent_creation_exempt_hours=recent_creation_exempt_hours,
        ),
        clock=clock,
    )

    return Container(
        tz=tz,
        clock=clock,
        time_clock_repo=time_clock_repo,
        shifts_repo=shifts_repo,
        time_clock_service=time_clock_service,
        report_service=report_service,
        schedule_service=schedule_service,
        missed_shift_sweeper=missed_shift_sweeper,
    )
