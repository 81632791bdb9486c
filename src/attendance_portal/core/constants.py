"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PARTITION_PREFIX = "attendance_"
ROLL_NUMBER_DELIMITER = "-"
DEFAULT_SESSION_MINUTES = 60
MIN_PASSWORD_LENGTH = 6
