from __future__ import annotations

import importlib
import logging
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.errors import register_error_handlers
from .container import Container, build_container
from .reports.controller import register as register_reports
from .scheduling.controller import register as register_scheduling
from .timeclock.controller import register as register_timeclock

logger = logging.getLogger(__name__)


def resolve_timezone(name: Optional[str]):
    """IANA zone name, or None for the system local zone."""
    return ZoneInfo(name) if name else None


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        api_config = getattr(settings, "API_CONFIG")
        container = build_container(
            api_config=api_config,
            tz=resolve_timezone(getattr(settings, "TIMEZONE", "")),
            grace_minutes=int(getattr(settings, "GRACE_PERIOD_MINUTES", 15)),
            recent_creation_exempt_hours=int(getattr(settings, "RECENT_CREATION_EXEMPT_HOURS", 24)),
            tick_interval=float(getattr(settings, "TICK_INTERVAL_SECONDS", 1.0)),
        )
        logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    app.extensions["timeflow"] = container
    register_error_handlers(app)
    register_timeclock(app, container)
    register_reports(app, container)
    register_scheduling(app, container)

    return app
