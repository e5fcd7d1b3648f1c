"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

from .enums import Locale

DEFAULT_LOCALE = Locale.ES
DEFAULT_UPCOMING_DAYS = 30
DEFAULT_UPCOMING_LIMIT = 10
DEFAULT_UPCOMING_SESSIONS_LIMIT = 5
DEFAULT_PAGE_SIZE = 10
DAYS_PER_WEEK = 7

# Lower bound used when a listing only has an upper date bound.
OPEN_RANGE_START = date(2000, 1, 1)
