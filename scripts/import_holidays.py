"""Import public holidays from the configured feed.

Usage: python scripts/import_holidays.py [COUNTRY] [YEAR]
"""

from __future__ import annotations

import logging
import sys

from _bootstrap import describe, load_settings

from employee_attendance.container import AppSettings, build_container
from employee_attendance.core.exceptions import HolidayFeedError


def main(argv: list[str]) -> int:
    settings = load_settings()
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    app_settings = AppSettings.from_module(settings)
    country = (argv[0] if len(argv) > 0 else app_settings.holiday_country).upper()
    year = int(argv[1]) if len(argv) > 1 else app_settings.holiday_import_year

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=app_settings)
    try:
        summary = container.holiday_import_service.import_holidays(country, year, None)
    except HolidayFeedError as e:
        print(f"FAILED: {e}")
        return 1

    if not summary.success:
        print(f"No holidays found for {country} {year}")
        return 1

    print(
        f"OK: {country} {year} -> {describe(settings.DB_CONFIG)} "
        f"imported={summary.imported} skipped={summary.skipped} failed={summary.failed} total={summary.total}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
