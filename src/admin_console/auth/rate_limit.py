from __future__ import annotations

from datetime import datetime, timedelta
from threading import Lock


class RateLimiter:
    """
    In-memory sliding-window limiter for the unauthenticated status lookups.

    Counts requests per identifier (client address) and refuses once
    `max_attempts` land inside `window_seconds`. Per-process only.

    Safe to share between request threads. Identifiers whose attempts have all
    aged out of the window are swept, so the map only holds recent clients.
    """

    def __init__(self, max_attempts: int = 30, window_seconds: int = 60) -> None:
        self._attempts: dict[str, list[datetime]] = {}
        self._max_attempts = max_attempts
        self._window = timedelta(seconds=window_seconds)
        self._lock = Lock()
        self._last_sweep = datetime.now()

    def check_and_increment(self, identifier: str) -> tuple[bool, int]:
        """Return (allowed, remaining) and record the attempt when allowed."""
        now = datetime.now()
        with self._lock:
            if now - self._last_sweep >= self._window:
                self._sweep(now)

            recent = [t for t in self._attempts.get(identifier, ()) if now - t < self._window]
            if len(recent) >= self._max_attempts:
                self._attempts[identifier] = recent
                return False, 0

            recent.append(now)
            self._attempts[identifier] = recent
            return True, self._max_attempts - len(recent)

    def _sweep(self, now: datetime) -> None:
        # Attempts are appended in time order, so the last one is the newest.
        self._attempts = {
            identifier: attempts
            for identifier, attempts in self._attempts.items()
            if attempts and now - attempts[-1] < self._window
        }
        self._last_sweep = now
