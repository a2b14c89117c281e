"""Tests for JWT issuance and rate limiting."""

from __future__ import annotations

import jwt

from research_assistant.api.auth import configured_api_keys, issue_token, key_subject
from research_assistant.api.rate_limiter import SlidingWindowRateLimiter
from research_assistant.config.settings import Settings


def test_issue_token_decodes_with_hashed_subject():
    settings = Settings(jwt_secret="test-secret", jwt_expiry_minutes=5)
    token = issue_token("my-key", settings)
    decoded = jwt.decode(token.access_token, "test-secret", algorithms=["HS256"])
    assert decoded["sub"] == key_subject("my-key")
    assert decoded["sub"] != "my-key"
    assert token.expires_in == 300


def test_key_subject_stable():
    assert key_subject("abc") == key_subject("abc")
    assert key_subject("abc") != key_subject("abd")


def test_configured_api_keys_parsing():
    settings = Settings(api_keys=" one, two ,,")
    assert configured_api_keys(settings) == ["one", "two"]


def test_rate_limiter_allows():
    limiter = SlidingWindowRateLimiter()
    for _ in range(5):
        assert limiter.check("user1", max_requests=5) is True
    assert limiter.check("user1", max_requests=5) is False
    assert limiter.retry_after("user1") >= 1


def test_rate_limiter_separate_keys():
    limiter = SlidingWindowRateLimiter()
    for _ in range(5):
        limiter.check("user1", max_requests=5)
    assert limiter.check("user1", max_requests=5) is False
    assert limiter.check("user2", max_requests=5) is True


def test_rate_limiter_window_expiry():
    limiter = SlidingWindowRateLimiter(window_seconds=0)
    assert limiter.check("user1", max_requests=1) is True
    assert limiter.check("user1", max_requests=1) is True
