import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "clinic_workforce"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

FULL_DAY_HOURS = os.getenv("FULL_DAY_HOURS", "8.0")
HALF_DAY_HOURS = os.getenv("HALF_DAY_HOURS", "4.0")

PAYROLL_FORWARD_ONLY = bool(int(os.getenv("PAYROLL_FORWARD_ONLY", "1")))
