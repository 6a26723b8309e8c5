"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_DAILY_HOURS = 1
MAX_DAILY_HOURS = 7

PERIOD_MONTHS_BACK = 12
PERIOD_MONTHS_AHEAD = 6
SECOND_HALF_START_DAY = 16

DEFAULT_TOAST_TTL_SECONDS = 3.0
DEFAULT_SESSION_DAYS = 7
