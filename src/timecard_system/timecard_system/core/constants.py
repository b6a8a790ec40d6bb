"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Pay rates (currency units per hour). Fixed, never configurable.
REGULAR_RATE = 1000
NIGHT_RATE = 1250

# Night window is [22:00, 06:00) on the local wall clock.
NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6

DEFAULT_SESSION_DAYS = 7
DEFAULT_REPORT_DAYS = 7
MIN_PASSWORD_LENGTH = 6
DEFAULT_HISTORY_MONTHS = 6
MAX_HISTORY_MONTHS = 24
