"""
Application-wide constants.
Centralizes magic numbers and configuration values.
"""

# Day-of-week numbering used by the constraint table (0=Sunday..6=Saturday)
SUNDAY = 0
MONDAY = 1
FRIDAY = 5
SATURDAY = 6
DAYS_IN_WEEK = 7

# Formatting
LOCAL_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"  # No offset suffix
DAY_KEY_FORMAT = "%Y-%m-%d"
TIME_OF_DAY_FORMAT = "%H:%M"

# Validation limits
MAX_MIN_DURATION_MINUTES = 24 * 60
