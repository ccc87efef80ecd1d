import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_sheet_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_DAYS = 7
# Cheap hashing keeps the test suite fast.
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
