from __future__ import annotations

import pytest
from fastapi import HTTPException

from servicedesk.core import rate_limiter


class _Clock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock(monkeypatch):
    fake = _Clock()
    monkeypatch.setattr(rate_limiter.time, "monotonic", fake)
    return fake


def test_limit_resets_after_window(clock):
    limiter = rate_limiter._RateLimiter()
    limiter.hit("booking:1.2.3.4", 2, 60)
    limiter.hit("booking:1.2.3.4", 2, 60)
    with pytest.raises(HTTPException) as exc:
        limiter.hit("booking:1.2.3.4", 2, 60)
    assert exc.value.status_code == 429
    assert exc.value.headers["Retry-After"] == "60"

    clock.now += 60
    limiter.hit("booking:1.2.3.4", 2, 60)


def test_expired_windows_are_dropped(clock):
    limiter = rate_limiter._RateLimiter()
    for n in range(50):
        limiter.hit(f"booking:10.0.0.{n}", 5, 60)
    assert len(limiter) == 50

    clock.now += 61
    limiter.hit("booking:10.0.1.1", 5, 60)
    assert len(limiter) == 1
