import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_db"),
}

STORAGE = os.getenv("STORAGE", "mysql")

DAY_CUTOVER_HOUR = int(os.getenv("DAY_CUTOVER_HOUR", "6"))
END_OF_DAY_LOGOUT_HOUR = int(os.getenv("END_OF_DAY_LOGOUT_HOUR", "17"))
MAX_PERSIST_RETRIES = int(os.getenv("MAX_PERSIST_RETRIES", "3"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, schema.sql is applied on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
