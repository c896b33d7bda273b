import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:8000/api"),
    "token": os.getenv("API_TOKEN"),
    "timeout": float(os.getenv("API_TIMEOUT", "20")),
}

# IANA zone name used for calendar days; empty = system local zone
TIMEZONE = os.getenv("TIMEZONE", "")

GRACE_PERIOD_MINUTES = int(os.getenv("GRACE_PERIOD_MINUTES", "15"))
RECENT_CREATION_EXEMPT_HOURS = int(os.getenv("RECENT_CREATION_EXEMPT_HOURS", "24"))
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
