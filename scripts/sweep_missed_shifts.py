from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for entry in (REPO_ROOT, REPO_ROOT / "src" / "timeflow"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

from dotenv import load_dotenv

from config import get_settings_module

from timeflow.container import build_container
from timeflow.main import resolve_timezone


def main() -> None:
    parser = argparse.ArgumentParser(description="Flag overdue scheduled shifts nobody clocked in for.")
    parser.add_argument("--company", help="limit the sweep to one company id")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        api_config=dict(settings.API_CONFIG),
        tz=resolve_timezone(getattr(settings, "TIMEZONE", "")),
        grace_minutes=int(settings.GRACE_PERIOD_MINUTES),
        recent_creation_exempt_hours=int(settings.RECENT_CREATION_EXEMPT_HOURS),
    )
    result = container.missed_shift_sweeper.sweep(company_id=args.company)
    print(
        f"OK: flagged={len(result.flagged)} skipped={len(result.skipped)} failed={len(result.failed)}"
    )
    if result.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
