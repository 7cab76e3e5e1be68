import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "academic_records"),
}

SMTP_CONFIG = {
    "enabled": bool(int(os.getenv("SMTP_ENABLED", "1"))),
    "host": os.getenv("SMTP_HOST", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "username": os.getenv("SMTP_USER", ""),
    "password": os.getenv("SMTP_PASS", ""),
    "sender": os.getenv("FROM_EMAIL", ""),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Parallel workers for notification fan-out (1 = sequential)
NOTIFICATION_WORKERS = int(os.getenv("NOTIFICATION_WORKERS", "4"))
