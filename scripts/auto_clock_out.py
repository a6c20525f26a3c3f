"""Close open attendance records at the end of the work day.

Intended for cron, e.g. ``5 19 * * 1-5 python scripts/auto_clock_out.py``.
Does nothing unless the organization has auto clock-out enabled.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_portal.hr_portal.common.datetime_utils import now_local, parse_iso_date
from src.hr_portal.hr_portal.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--date", help="work date (YYYY-MM-DD), defaults to today")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    work_date = parse_iso_date(args.date) if args.date else now_local().date()
    container = build_container(settings=settings)
    closed = container.attendance_service.auto_clock_out(work_date)
    print(f"OK: auto clock-out closed {len(closed)} record(s) for {work_date.isoformat()}")


if __name__ == "__main__":
    main()
