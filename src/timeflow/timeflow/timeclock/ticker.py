from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TICK_INTERVAL_SECONDS
from .model import SessionSnapshot
from .session import TimeClockSession

logger = logging.getLogger(__name__)


class SessionTicker:
    """Periodic wake-up that pushes a fresh snapshot to the presentation layer.

    Each tick recomputes from stored timestamps, so missed ticks (app suspended,
    thread starved) self-correct on the next one.
    """

    def __init__(
        self,
        session: TimeClockSession,
        listener: Callable[[SessionSnapshot], None],
        *,
        interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._session = session
        self._listener = listener
        self._interval = float(interval)
        self._clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> Optional[SessionSnapshot]:
        if not self._session.alive:
            return None
        snapshot = self._session.snapshot(self._clock())
        if not snapshot.is_live:
            return None
        self._listener(snapshot)
        return snapshot

    def start(self) -> None:
        if self.is_running:
            return
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="session-ticker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self._interval * 2)
        self._thread = None

    def _run(self) -> None:
        while True:
            try:
                self.tick()
            except Exception:
                logger.exception("session tick failed")
            if self._stop.wait(self._interval) or not self._session.alive:
                return
