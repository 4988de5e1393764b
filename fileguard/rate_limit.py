"""In-memory fixed-window download rate limiter."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Protocol

LOGGER = logging.getLogger(__name__)


class DownloadLimiter(Protocol):
    """Anything that can decide whether a client may download right now."""

    def check(self, client_id: str) -> bool:
        ...


@dataclass
class RateLimitRecord:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Counts downloads per client in fixed windows of ``window_ms``.

    A window opens on the first request from a client and closes ``window_ms``
    later; the next request after that opens a fresh window with a count of one.
    A client can therefore land ``max_downloads`` requests at the end of one
    window and as many again at the start of the next.

    Records for clients whose window has closed are dropped by :meth:`sweep`,
    which :meth:`check` also runs every ``sweep_interval_seconds``.
    """

    def __init__(
        self,
        max_downloads: int = 100,
        window_ms: int = 60_000,
        *,
        sweep_interval_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_downloads < 1:
            raise ValueError("max_downloads must be at least 1")
        if window_ms < 1:
            raise ValueError("window_ms must be at least 1")
        self.max_downloads = max_downloads
        self.window_ms = window_ms
        self.sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._records: Dict[str, RateLimitRecord] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    @property
    def window_seconds(self) -> float:
        return self.window_ms / 1000

    def check(self, client_id: str) -> bool:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.sweep_interval:
                self._sweep_locked(now)
            record = self._records.get(client_id)
            if record is None or now > record.reset_at:
                self._records[client_id] = RateLimitRecord(
                    count=1, reset_at=now + self.window_seconds
                )
                return True
            if record.count >= self.max_downloads:
                return False
            record.count += 1
            return True

    def sweep(self) -> int:
        """Drop records whose window has closed and return how many went."""

        with self._lock:
            return self._sweep_locked(self._clock())

    def reset(self) -> None:
        with self._lock:
            self._records.clear()

    def get(self, client_id: str) -> RateLimitRecord | None:
        with self._lock:
            record = self._records.get(client_id)
            if record is None:
                return None
            return RateLimitRecord(count=record.count, reset_at=record.reset_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _sweep_locked(self, now: float) -> int:
        expired = [key for key, record in self._records.items() if now > record.reset_at]
        for key in expired:
            del self._records[key]
        self._last_sweep = now
        if expired:
            LOGGER.debug("swept %d expired rate limit records", len(expired))
        return len(expired)
