import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "nebosh_attendance_test"),
}
DB_POOL_SIZE = 2

HOST = "127.0.0.1"
PORT = 3000

MAX_CONTENT_LENGTH = 1024 * 1024

LOGIN = {
    "username": "trainer@example.com",
    "password": "s3cret",
    "token": "test-token",
}

LOG_LEVEL = "WARNING"
LOG_DIR = None

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
CHECK_DB_ON_STARTUP = False
