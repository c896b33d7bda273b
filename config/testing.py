import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://testserver/api"),
    "token": None,
    "timeout": 5,
}

TIMEZONE = os.getenv("TIMEZONE", "UTC")

GRACE_PERIOD_MINUTES = 15
RECENT_CREATION_EXEMPT_HOURS = 24
TICK_INTERVAL_SECONDS = 1.0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
