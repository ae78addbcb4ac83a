"""Fixed-window rate limiting for story creation.

State lives in the limiter's store, so each process has its own counters
unless a shared store is plugged in. The in-memory store is best-effort abuse
mitigation: it is lost on restart and not shared between workers.
"""

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

UNKNOWN_CLIENT = "unknown"


@dataclass
class RateLimitRecord:
    """Request count for one client in the current window."""

    count: int
    window_start: float


class RateLimitStore(Protocol):
    """Backing store for rate limit counters.

    ``consume`` must perform its read-modify-write atomically per key.
    """

    def consume(
        self, key: str, now: float, window_seconds: float, max_requests: int
    ) -> tuple[bool, RateLimitRecord]: ...

    def get(self, key: str) -> RateLimitRecord | None: ...


class InMemoryRateLimitStore:
    """Process-local counters guarded by a lock.

    Records whose window has ended are evicted, at most once per window, so
    the map only holds clients seen in roughly the last two windows.
    """

    def __init__(self) -> None:
        self._records: dict[str, RateLimitRecord] = {}
        self._lock = threading.Lock()
        self._last_sweep: float | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _sweep(self, now: float, window_seconds: float) -> None:
        if self._last_sweep is not None and now - self._last_sweep <= window_seconds:
            return
        expired = [
            key
            for key, record in self._records.items()
            if now - record.window_start > window_seconds
        ]
        for key in expired:
            del self._records[key]
        self._last_sweep = now

    def consume(
        self, key: str, now: float, window_seconds: float, max_requests: int
    ) -> tuple[bool, RateLimitRecord]:
        with self._lock:
            self._sweep(now, window_seconds)

            record = self._records.get(key)
            if record is None or now - record.window_start > window_seconds:
                record = RateLimitRecord(count=0, window_start=now)
                self._records[key] = record

            if record.count >= max_requests:
                return False, RateLimitRecord(record.count, record.window_start)

            record.count += 1
            return True, RateLimitRecord(record.count, record.window_start)

    def get(self, key: str) -> RateLimitRecord | None:
        with self._lock:
            record = self._records.get(key)
            return RateLimitRecord(record.count, record.window_start) if record else None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class RateLimiter:
    """Allows at most ``max_requests`` per client in each fixed window."""

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60.0,
        store: RateLimitStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.clock = clock

    def allow(self, client_id: str) -> bool:
        """Record a request and report whether it may proceed."""
        allowed, _ = self.store.consume(
            client_id or UNKNOWN_CLIENT, self.clock(), self.window_seconds, self.max_requests
        )
        return allowed

    def get_record(self, client_id: str) -> RateLimitRecord | None:
        return self.store.get(client_id or UNKNOWN_CLIENT)

    def retry_after(self, client_id: str) -> int:
        """Seconds until the client's current window ends."""
        record = self.get_record(client_id)
        if record is None:
            return 0
        remaining = record.window_start + self.window_seconds - self.clock()
        return max(0, math.ceil(remaining))


def client_id_from_headers(forwarded_for: str | None) -> str:
    """Client identity from an X-Forwarded-For value; unidentified clients share one bucket."""
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return UNKNOWN_CLIENT
