import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "admin"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "nebosh_attendance"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(20 * 1024 * 1024)))

LOGIN = {
    "username": os.getenv("LOGIN_USERNAME", "please-set-LOGIN_USERNAME"),
    "password": os.getenv("LOGIN_PASSWORD", "please-set-LOGIN_PASSWORD"),
    "token": os.getenv("LOGIN_TOKEN", "mock-jwt-token"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR") or None

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Refuse to start without a reachable database.
CHECK_DB_ON_STARTUP = bool(int(os.getenv("CHECK_DB_ON_STARTUP", "1")))
