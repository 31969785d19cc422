"""
JWT token creation for the task manager API.

Issues the bearer tokens handed out by ``POST /api/auth/login``.  Tokens are
signed with HS256 using the server-side ``JWT_SECRET``; the same secret is
used by :mod:`taskmanager.auth` to verify them, so there is no server-side
session record at all.

Token structure (claims):
    - ``username`` -- identity of the authenticated (mock) user.
    - ``iat``      -- *issued-at* timestamp (UTC epoch seconds).
    - ``exp``      -- *expiration* timestamp (UTC epoch seconds).

Key Concepts Demonstrated:
- HS256 symmetric signing with PyJWT
- Constant-time comparison against a single configured credential pair
- Distinguishing bad credentials from a misconfigured server
"""

from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .errors import InvalidCredentials, ServerMisconfigured

DEFAULT_EXPIRY_SECONDS = 3600


def create_token(
    username: str,
    secret: str,
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
    algorithm: str = "HS256",
) -> str:
    """
    Create a signed JWT carrying ``username`` plus ``iat`` / ``exp``.

    Args:
        username: Identity to embed.  Must be a non-empty string.
        secret: HMAC signing secret.
        expiry_seconds: Seconds from *now* until the token expires.  A
            negative value produces an already-expired token, which is
            handy in tests.
        algorithm: Signing algorithm; HS256 unless configured otherwise.

    Returns:
        A compact JWS string (``header.payload.signature``).

    Raises:
        ValueError: If *username* is blank.
    """
    if not isinstance(username, str) or not username.strip():
        raise ValueError("username must be a non-empty string")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(seconds=int(expiry_seconds))

    payload: dict[str, Any] = {
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def _matches(supplied: str, expected: str) -> bool:
    # Exact, case-sensitive match; no trimming. JSON escapes can decode to
    # lone surrogates, which plain utf-8 refuses to encode.
    return hmac.compare_digest(
        supplied.encode("utf-8", "surrogatepass"), expected.encode("utf-8", "surrogatepass")
    )


def issue_token(
    username: str,
    password: str,
    *,
    expected_username: str,
    expected_password: str,
    secret: str | None,
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
    algorithm: str = "HS256",
) -> str:
    """
    Check a credential pair and mint a token for it.

    Credentials are compared first, so a wrong password is always reported
    as :class:`InvalidCredentials` even on a server without a secret.

    Raises:
        InvalidCredentials: The pair does not match the configured account.
        ServerMisconfigured: The pair matched but no signing secret is set.
    """
    if not (_matches(username, expected_username) and _matches(password, expected_password)):
        raise InvalidCredentials()

    if not secret:
        raise ServerMisconfigured("JWT secret not configured")

    return create_token(username, secret, expiry_seconds=expiry_seconds, algorithm=algorithm)
