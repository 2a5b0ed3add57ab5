"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Events before this local hour belong to the previous work-day.
DEFAULT_DAY_CUTOVER_HOUR = 6
# A logout at or after this local hour (or before the cutover) ends the day.
DEFAULT_END_OF_DAY_LOGOUT_HOUR = 17
DEFAULT_MAX_PERSIST_RETRIES = 3
DEFAULT_HISTORY_LIMIT = 30

SECONDS_PER_HOUR = 3600
