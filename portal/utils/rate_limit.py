"""Sliding-window request throttling kept in process memory.

Each worker process keeps its own windows, so the effective limit grows with
the number of processes serving the app and resets when a process restarts.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from flask import current_app, g, request

from portal.errors import RateLimitedError

DEFAULT_MAX_REQUESTS = 5
DEFAULT_WINDOW_SECONDS = 60


class SlidingWindowRateLimiter:
    """Count requests per identifier over the trailing ``window_seconds``."""

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, List[float]] = {}
        self._lock = threading.Lock()

    def _limits(self, max_requests: Optional[int], window_seconds: Optional[float]):
        limit = self.max_requests if max_requests is None else max_requests
        window = self.window_seconds if window_seconds is None else window_seconds
        return limit, window

    def is_rate_limited(
        self,
        identifier: str,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
    ) -> bool:
        """Record a request for ``identifier`` unless it is over the limit.

        A rejected request is not added to the window.
        """
        limit, window = self._limits(max_requests, window_seconds)
        now = self._clock()
        window_start = now - window

        with self._lock:
            recent = [ts for ts in self._windows.get(identifier, []) if ts > window_start]
            if len(recent) >= limit:
                self._windows[identifier] = recent
                return True

            recent.append(now)
            self._windows[identifier] = recent
            return False

    def get_rate_limit_headers(
        self,
        identifier: str,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
    ) -> Dict[str, str]:
        """Describe the identifier's current budget without recording anything."""
        limit, window = self._limits(max_requests, window_seconds)
        now = self._clock()
        window_start = now - window

        with self._lock:
            used = sum(1 for ts in self._windows.get(identifier, []) if ts > window_start)

        reset_at = datetime.fromtimestamp(now + window, tz=timezone.utc)
        return {
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Remaining": str(max(0, limit - used)),
            "X-RateLimit-Reset": reset_at.isoformat(),
        }

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def client_identifier() -> str:
    """Return the caller's address (already resolved from X-Forwarded-For by ProxyFix)."""
    return request.remote_addr or "unknown"


def enforce_rate_limit() -> None:
    """Throttle the current request, raising ``RateLimitedError`` when over budget.

    The resulting ``X-RateLimit-*`` headers are stashed on ``g`` so that the
    after-request hook can attach them to whatever response is produced.
    """
    limiter: SlidingWindowRateLimiter = current_app.extensions["rate_limiter"]
    identifier = client_identifier()

    limited = limiter.is_rate_limited(identifier)
    g.rate_limit_headers = limiter.get_rate_limit_headers(identifier)

    if limited:
        current_app.logger.warning("Rate limit exceeded for %s on %s", identifier, request.path)
        raise RateLimitedError()


def register_rate_limit_headers(app) -> None:
    """Attach an after-request hook copying throttling headers onto responses."""

    @app.after_request
    def _add_rate_limit_headers(response):
        for name, value in g.get("rate_limit_headers", {}).items():
            response.headers[name] = value
        return response
