from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_identifier
from ..core.constants import (
    DEFAULT_MAX_SESSIONS,
    DEFAULT_SESSION_IDLE_TTL_SECONDS,
    DEFAULT_TICK_INTERVAL_SECONDS,
)
from .factory import ElapsedStrategyFactory
from .model import SessionSnapshot
from .repository import TimeClockRepository
from .session import TimeClockSession
from .ticker import SessionTicker

logger = logging.getLogger(__name__)


class TimeClockService:
    """Keeps one ``TimeClockSession`` per employee so break totals survive between calls.

    Sessions unused for ``idle_ttl_seconds`` are dropped, and at most
    ``max_sessions`` are kept (least recently used goes first). Every action
    runs refresh + action under the session's lock.
    """

    def __init__(
        self,
        repository: TimeClockRepository,
        *,
        tz: Optional[tzinfo] = None,
        strategy_factory: Optional[ElapsedStrategyFactory] = None,
        clock: Callable[[], datetime] = now_utc,
        idle_ttl_seconds: float = DEFAULT_SESSION_IDLE_TTL_SECONDS,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        tick_interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
    ):
        self._repo = repository
        self._tz = tz
        self._factory = strategy_factory or ElapsedStrategyFactory()
        self._clock = clock
        self._idle_ttl = timedelta(seconds=idle_ttl_seconds)
        self._max_sessions = max(int(max_sessions), 1)
        self._tick_interval = float(tick_interval)
        # employee id -> (session, last used)
        self._sessions: "OrderedDict[str, tuple[TimeClockSession, datetime]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def session_for(self, employee_id: Optional[str]) -> TimeClockSession:
        employee_id = require_identifier(employee_id, "employee")
        now = self._clock()
        evicted = []
        with self._lock:
            entry = self._sessions.pop(employee_id, None)
            session = entry[0] if entry else None
            if session is None:
                session = TimeClockSession(
                    self._repo,
                    employee_id,
                    tz=self._tz,
                    strategy_factory=self._factory,
                    clock=self._clock,
                )
            self._sessions[employee_id] = (session, now)

            for key, (_, last_used) in list(self._sessions.items()):
                if key != employee_id and now - last_used > self._idle_ttl:
                    evicted.append(self._sessions.pop(key)[0])
            while len(self._sessions) > self._max_sessions:
                evicted.append(self._sessions.popitem(last=False)[1][0])

        for stale in evicted:
            stale.close()
        if evicted:
            logger.debug("evicted %d clock session(s)", len(evicted))
        return session

    def release(self, employee_id: str) -> None:
        with self._lock:
            entry = self._sessions.pop(employee_id, None)
        if entry is not None:
            entry[0].close()

    def ticker_for(self, employee_id: Optional[str], listener: Callable[[SessionSnapshot], None]) -> SessionTicker:
        return SessionTicker(
            self.session_for(employee_id),
            listener,
            interval=self._tick_interval,
            clock=self._clock,
        )

    def current(self, employee_id: Optional[str]) -> SessionSnapshot:
        return self.session_for(employee_id).refresh()

    def clock_in(self, employee_id: Optional[str], shift_id: Optional[str] = None) -> SessionSnapshot:
        session = self.session_for(employee_id)
        with session.lock:
            session.refresh()
            return session.clock_in(shift_id)

    def start_break(self, employee_id: Optional[str]) -> SessionSnapshot:
        session = self.session_for(employee_id)
        with session.lock:
            session.refresh()
            return session.start_break()

    def end_break(self, employee_id: Optional[str]) -> SessionSnapshot:
        session = self.session_for(employee_id)
        with session.lock:
            session.refresh()
            return session.end_break()

    def clock_out(self, employee_id: Optional[str]) -> SessionSnapshot:
        session = self.session_for(employee_id)
        with session.lock:
            session.refresh()
            return session.clock_out()
