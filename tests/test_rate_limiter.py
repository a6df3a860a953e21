"""Tests for the per-key sliding-window limiter guarding /api/analyze."""

import threading
import time

from nyaaybot.rate_limiter import RateLimiter

ADVOCATE = "advocate-key"
CLERK = "clerk-key"


def _exhaust(limiter: RateLimiter, key: str) -> None:
    for _ in range(limiter.max_requests):
        assert limiter.is_allowed(key)


def test_quota_is_granted_in_full_then_refused():
    limiter = RateLimiter(max_requests=3, window_seconds=60)

    results = [limiter.is_allowed(ADVOCATE) for _ in range(4)]

    assert results == [True, True, True, False]


def test_quota_is_tracked_per_key():
    limiter = RateLimiter(max_requests=2, window_seconds=60)
    _exhaust(limiter, ADVOCATE)

    assert limiter.is_allowed(ADVOCATE) is False
    assert limiter.is_allowed(CLERK) is True
    assert limiter.remaining(CLERK) == 1


def test_quota_is_restored_once_window_slides_past():
    limiter = RateLimiter(max_requests=1, window_seconds=0.1)
    _exhaust(limiter, ADVOCATE)
    assert limiter.is_allowed(ADVOCATE) is False

    time.sleep(0.15)

    assert limiter.is_allowed(ADVOCATE) is True


def test_refused_requests_are_not_counted():
    limiter = RateLimiter(max_requests=1, window_seconds=0.3)
    _exhaust(limiter, ADVOCATE)
    time.sleep(0.2)
    for _ in range(5):
        assert limiter.is_allowed(ADVOCATE) is False

    time.sleep(0.15)

    assert limiter.is_allowed(ADVOCATE) is True


def test_remaining_counts_down_to_zero():
    limiter = RateLimiter(max_requests=2, window_seconds=60)

    seen = [limiter.remaining(ADVOCATE)]
    for _ in range(3):
        limiter.is_allowed(ADVOCATE)
        seen.append(limiter.remaining(ADVOCATE))

    assert seen == [2, 1, 0, 0]


def test_retry_after_is_none_until_limited():
    limiter = RateLimiter(max_requests=2, window_seconds=60)
    assert limiter.retry_after(ADVOCATE) is None

    limiter.is_allowed(ADVOCATE)

    assert limiter.retry_after(ADVOCATE) is None


def test_retry_after_reports_seconds_until_oldest_request_expires():
    limiter = RateLimiter(max_requests=1, window_seconds=3600)
    _exhaust(limiter, ADVOCATE)

    wait = limiter.retry_after(ADVOCATE)

    assert wait is not None
    assert 3599 <= wait <= 3601


def test_concurrent_requests_never_exceed_limit():
    limiter = RateLimiter(max_requests=10, window_seconds=60)
    allowed = []

    def hit():
        for _ in range(10):
            allowed.append(limiter.is_allowed("shared"))

    threads = [threading.Thread(target=hit) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(allowed) == 10
