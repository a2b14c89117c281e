"""In-memory sliding window rate limiter, one instance per app."""

from __future__ import annotations

import time
from collections import defaultdict, deque

from fastapi import Depends, HTTPException, Request, status

from research_assistant.api.auth import verify_token
from research_assistant.observability.logger import get_logger

logger = get_logger("rate_limiter")


class SlidingWindowRateLimiter:
    """Tracks request timestamps per key within a sliding window."""

    def __init__(self, window_seconds: int = 60) -> None:
        self._window = window_seconds
        self._requests: dict[str, deque[float]] = defaultdict(deque)

    def check(self, key: str, max_requests: int) -> bool:
        """Return True if request is allowed, False if rate-limited."""
        now = time.monotonic()
        stamps = self._requests[key]
        while stamps and stamps[0] <= now - self._window:
            stamps.popleft()

        if len(stamps) >= max_requests:
            return False

        stamps.append(now)
        return True

    def retry_after(self, key: str) -> int:
        stamps = self._requests.get(key)
        if not stamps:
            return 0
        return max(1, int(stamps[0] + self._window - time.monotonic()) + 1)


async def rate_limit(
    request: Request,
    token_payload: dict = Depends(verify_token),
) -> dict:
    """FastAPI dependency: authenticate, then enforce the per-subject request budget."""
    settings = request.app.state.settings
    limiter: SlidingWindowRateLimiter = request.app.state.rate_limiter
    key = token_payload.get("sub", "anonymous")

    if not limiter.check(key, settings.rate_limit_requests_per_minute):
        logger.warning("rate_limited", key=key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Try again later.",
            headers={"Retry-After": str(limiter.retry_after(key))},
        )

    return token_payload
