"""Test helper functions shared by the unit, integration and contract suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

TEST_JWT_SECRET = "test-jwt-secret-for-local-tests-0123456789"
TEST_USERNAME = "admin"
TEST_PASSWORD = "changeme"
OTHER_USERNAME = "intruder"


def create_test_token(
    username: str = TEST_USERNAME,
    secret: str = TEST_JWT_SECRET,
    expired: bool = False,
    algorithm: str = "HS256",
    **extra_claims: Any,
) -> str:
    """Create a signed test token; ``expired=True`` backdates ``exp`` by an hour."""
    now = datetime.now(timezone.utc)
    expiry_time = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload: dict[str, Any] = {
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(expiry_time.timestamp()),
    }
    payload.update(extra_claims)
    return jwt.encode(payload, secret, algorithm=algorithm)


def auth_headers(token: str) -> dict[str, str]:
    """Build common JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
