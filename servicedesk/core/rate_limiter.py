"""Per-client fixed-window rate limiting, used as a route dependency."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from fastapi import HTTPException, Request

from servicedesk.core.config import get_settings


@dataclass
class _Window:
    count: int
    resets_at: float


class _RateLimiter:
    def __init__(self) -> None:
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, limit: int, window_seconds: int) -> None:
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            window = self._windows.get(key)
            if window is None:
                window = self._windows[key] = _Window(0, now + window_seconds)
            window.count += 1
            if window.count > limit:
                retry_after = max(1, int(window.resets_at - now))
                raise HTTPException(
                    429,
                    "Too many requests. Please try again shortly.",
                    headers={"Retry-After": str(retry_after)},
                )

    def _prune(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now >= window.resets_at]
        for key in expired:
            del self._windows[key]

    def __len__(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


_limiter = _RateLimiter()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def limit_bookings(request: Request) -> None:
    """Route dependency throttling booking confirmations per client IP."""
    settings = get_settings()
    _limiter.hit(
        f"booking:{client_ip(request)}",
        settings.booking_rate_limit,
        settings.booking_rate_window_seconds,
    )


def reset_limits() -> None:
    """Forget every counter (used by tests and on settings reload)."""
    _limiter.reset()
