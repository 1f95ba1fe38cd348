"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PASSWORD_LENGTH = 6
CHART_LABEL_MAX_CHARS = 10
CHART_LABEL_SUFFIX = "..."

# datetime.weekday() value of the first day of a reporting week (Sunday).
WEEK_STARTS_ON = 6

CURRENCY = "PKR"
PHOTO_KEY_PREFIX = "worker_images"
DEFAULT_PHOTO_MAX_SIZE = 1024
