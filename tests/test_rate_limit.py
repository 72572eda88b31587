"""Tests for the sliding-window rate limiter."""

from __future__ import annotations

import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from portal.utils.rate_limit import SlidingWindowRateLimiter  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_sixth_request_in_window_is_limited_and_window_recovers():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60, clock=clock)

    results = []
    for _ in range(6):
        results.append(limiter.is_rate_limited("10.0.0.1"))
        clock.advance(1)

    assert results == [False, False, False, False, False, True]

    clock.advance(60)
    assert limiter.is_rate_limited("10.0.0.1") is False


def test_rejected_requests_are_not_counted():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=10, clock=clock)

    assert limiter.is_rate_limited("key") is False
    assert limiter.is_rate_limited("key") is False
    for _ in range(10):
        assert limiter.is_rate_limited("key") is True

    # Only the two accepted requests occupy the window
    clock.advance(10)
    assert limiter.is_rate_limited("key") is False
    assert limiter.is_rate_limited("key") is False
    assert limiter.is_rate_limited("key") is True


def test_identifiers_are_independent():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.is_rate_limited("a") is False
    assert limiter.is_rate_limited("a") is True
    assert limiter.is_rate_limited("b") is False


def test_per_call_limits_override_defaults():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.is_rate_limited("a", max_requests=3) is False
    assert limiter.is_rate_limited("a", max_requests=3) is False
    assert limiter.is_rate_limited("a", max_requests=3) is False
    assert limiter.is_rate_limited("a", max_requests=3) is True


def test_headers_report_remaining_without_recording():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60, clock=clock)

    headers = limiter.get_rate_limit_headers("fresh")
    assert headers["X-RateLimit-Limit"] == "5"
    assert headers["X-RateLimit-Remaining"] == "5"
    assert headers["X-RateLimit-Reset"].startswith("1970-01-01T00:17:40")

    limiter.is_rate_limited("fresh")
    limiter.is_rate_limited("fresh")
    for _ in range(3):
        assert limiter.get_rate_limit_headers("fresh")["X-RateLimit-Remaining"] == "3"


def test_reset_clears_all_windows():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.is_rate_limited("a")
    limiter.reset()
    assert limiter.is_rate_limited("a") is False


def test_endpoint_returns_429_with_headers_once_budget_is_spent(make_app):
    client = make_app(RATE_LIMIT_MAX_REQUESTS=2).test_client()
    body = {"certificateId": "PVI-2024-001", "participantName": "John Doe"}
    headers = {"X-Forwarded-For": "203.0.113.7"}

    first = client.post("/verify-certificate", json=body, headers=headers)
    second = client.post("/verify-certificate", json=body, headers=headers)
    third = client.post("/verify-certificate", json=body, headers=headers)

    assert first.status_code == 200
    assert first.headers["X-RateLimit-Remaining"] == "1"
    assert second.status_code == 200
    assert third.status_code == 429
    assert third.headers["X-RateLimit-Remaining"] == "0"
    assert third.get_json()["status"] == "Error"

    other_client = client.post(
        "/verify-certificate", json=body, headers={"X-Forwarded-For": "198.51.100.4"}
    )
    assert other_client.status_code == 200
