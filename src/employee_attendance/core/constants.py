"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# WITA (Asia/Makassar) is UTC+8.
DEFAULT_BUSINESS_UTC_OFFSET_MINUTES = 480

# 09:00 business-local; a check-in strictly after this minute is late.
DEFAULT_LATE_CUTOFF_MINUTES = 9 * 60

DEFAULT_WORLD_TIME_API_URL = "https://worldtimeapi.org/api/timezone/Asia/Makassar"
DEFAULT_WORLD_TIME_TIMEOUT_SECONDS = 5.0

DEFAULT_HOLIDAY_API_URL = "https://holidayapi.com/v1"
DEFAULT_HOLIDAY_API_TIMEOUT_SECONDS = 10.0
DEFAULT_HOLIDAY_COUNTRY = "ID"
DEFAULT_HOLIDAY_LANGUAGE = "id"
# Free-tier holiday feeds only serve last year's data.
DEFAULT_HOLIDAY_IMPORT_YEAR = 2024

NOTES_SEPARATOR = " | "
MAX_NOTES_LENGTH = 500

DEFAULT_PAGE_SIZE = 20
DEFAULT_RECENT_DAYS = 7
DEFAULT_UPCOMING_HOLIDAYS = 5
DEFAULT_DASHBOARD_RECENT = 10

RELIGIOUS_HOLIDAY_KEYWORDS = (
    "idul",
    "natal",
    "nyepi",
    "waisak",
    "imlek",
    "kenaikan",
    "maulid",
    "isra",
    "mi'raj",
)
