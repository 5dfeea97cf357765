"""Settings shared by every environment.

Environment modules import everything from here and override what differs.
"""

import os

from ..core.constants import (
    DEFAULT_BUSINESS_UTC_OFFSET_MINUTES,
    DEFAULT_HOLIDAY_API_TIMEOUT_SECONDS,
    DEFAULT_HOLIDAY_API_URL,
    DEFAULT_HOLIDAY_COUNTRY,
    DEFAULT_HOLIDAY_IMPORT_YEAR,
    DEFAULT_HOLIDAY_LANGUAGE,
    DEFAULT_LATE_CUTOFF_MINUTES,
    DEFAULT_WORLD_TIME_API_URL,
    DEFAULT_WORLD_TIME_TIMEOUT_SECONDS,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_attendance"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Business clock (WITA) and lateness cutoff
BUSINESS_UTC_OFFSET_MINUTES = int(os.getenv("BUSINESS_UTC_OFFSET_MINUTES", str(DEFAULT_BUSINESS_UTC_OFFSET_MINUTES)))
LATE_CUTOFF_MINUTES = int(os.getenv("LATE_CUTOFF_MINUTES", str(DEFAULT_LATE_CUTOFF_MINUTES)))

WORLD_TIME_API_URL = os.getenv("WORLD_TIME_API_URL", DEFAULT_WORLD_TIME_API_URL)
WORLD_TIME_TIMEOUT_SECONDS = float(os.getenv("WORLD_TIME_TIMEOUT_SECONDS", str(DEFAULT_WORLD_TIME_TIMEOUT_SECONDS)))

# Public holiday feed
HOLIDAY_API_URL = os.getenv("HOLIDAY_API_URL", DEFAULT_HOLIDAY_API_URL)
HOLIDAY_API_KEY = os.getenv("HOLIDAY_API_KEY", "")
HOLIDAY_API_COUNTRY = os.getenv("HOLIDAY_API_COUNTRY", DEFAULT_HOLIDAY_COUNTRY)
HOLIDAY_API_LANGUAGE = os.getenv("HOLIDAY_API_LANGUAGE", DEFAULT_HOLIDAY_LANGUAGE)
HOLIDAY_API_TIMEOUT_SECONDS = float(os.getenv("HOLIDAY_API_TIMEOUT_SECONDS", str(DEFAULT_HOLIDAY_API_TIMEOUT_SECONDS)))
HOLIDAY_IMPORT_YEAR = int(os.getenv("HOLIDAY_IMPORT_YEAR", str(DEFAULT_HOLIDAY_IMPORT_YEAR)))

DEBUG = False

AUTO_INIT_DB = False
AUTO_SEED_DB = False
