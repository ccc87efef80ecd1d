"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6
PASSWORD_HASH_METHOD = "pbkdf2:sha256:600000"
SESSION_TOKEN_BYTES = 24
AUTOSAVE_DELAY_SECONDS = 2.0
DATE_KEY_FORMAT = "%Y-%m-%d"
CHART_LABEL_FORMAT = "%b %d"
ALL_MEMBERS = "all"
CSV_FILENAME_PREFIX = "attendance-with-notes-"
MIRROR_FILENAME = "attendance-backup.json"
