import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Local civil timezone used for day grouping and clock display
TIMEZONE = os.getenv("TIMEZONE", "Asia/Tokyo")

HOURLY_RATE = int(os.getenv("HOURLY_RATE", "1500"))
MINUTE_UNIT = int(os.getenv("MINUTE_UNIT", "60"))
DELETION_WINDOW_MINUTES = int(os.getenv("DELETION_WINDOW_MINUTES", "5"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo user and punches on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
