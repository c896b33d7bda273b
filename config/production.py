import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", ""),
    "token": os.getenv("API_TOKEN"),
    "timeout": float(os.getenv("API_TIMEOUT", "20")),
}

TIMEZONE = os.getenv("TIMEZONE", "")

GRACE_PERIOD_MINUTES = int(os.getenv("GRACE_PERIOD_MINUTES", "15"))
RECENT_CREATION_EXEMPT_HOURS = int(os.getenv("RECENT_CREATION_EXEMPT_HOURS", "24"))
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
