"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_PERIOD_MINUTES = 15
DEFAULT_RECENT_CREATION_EXEMPT_HOURS = 24
DEFAULT_TICK_INTERVAL_SECONDS = 1.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 20
DEFAULT_BREAK_MINUTES = 30

# Cached clock sessions (HTTP layer)
DEFAULT_SESSION_IDLE_TTL_SECONDS = 12 * 3600
DEFAULT_MAX_SESSIONS = 1000
