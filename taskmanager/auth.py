"""
Bearer-token verification for protected endpoints.

Provides :func:`decode_token`, which verifies a JWT's signature and expiry
and then trusts its ``username`` claim, and the :func:`require_auth`
decorator that runs the full gate on every protected route:

1. extract ``Authorization: Bearer <token>`` (401 if absent or malformed),
2. refuse tokens over the configured size ceiling (431) before any
   cryptographic work,
3. verify signature and expiry against ``JWT_SECRET`` (401 on any failure),
4. store the identity on ``flask.g`` for downstream ownership checks.

Key Concepts Demonstrated:
- JWT verification with the ``PyJWT`` library
- Decorator pattern for endpoint authentication (``require_auth``)
- Using ``flask.g`` to store request-scoped user identity
- Pinning the accepted algorithm to prevent algorithm-confusion attacks
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import jwt
from flask import current_app, g, request

from .errors import InvalidToken, ServerMisconfigured, TokenTooLarge, Unauthenticated

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ALGORITHMS = ["HS256"]
REQUIRED_TOKEN_CLAIMS = ["username", "exp"]
DEFAULT_MAX_TOKEN_LENGTH = 8192


def decode_token(
    token: str,
    secret: str,
    algorithms: list[str] | None = None,
    leeway: int = 0,
) -> dict[str, Any]:
    """
    Verify *token* and return its payload.

    Signature and expiry are checked by PyJWT; once they pass, the payload
    is taken at face value.  The only semantic check is that ``username``
    is a non-blank string, since it becomes the request identity.

    Raises:
        jwt.InvalidTokenError: For any signature, expiry, format or claim
            problem.
    """
    payload = jwt.decode(
        token,
        secret,
        algorithms=algorithms or DEFAULT_ALLOWED_ALGORITHMS,
        options={"require": REQUIRED_TOKEN_CLAIMS},
        leeway=leeway,
    )
    username = payload.get("username")
    if not isinstance(username, str) or not username.strip():
        raise jwt.InvalidTokenError("Invalid username claim")
    return payload


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Return the token part of a ``Bearer`` header, or ``None``."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


def verify_request() -> dict[str, Any]:
    """
    Run the auth gate against the current request.

    Returns:
        The verified token payload.

    Raises:
        Unauthenticated: No usable bearer token.
        TokenTooLarge: Token exceeds ``JWT_MAX_TOKEN_LENGTH``.
        ServerMisconfigured: ``JWT_SECRET`` is not set.
        InvalidToken: Verification failed.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        logger.info("Auth rejected: no token or not properly formatted")
        raise Unauthenticated()

    max_length = int(current_app.config.get("JWT_MAX_TOKEN_LENGTH", DEFAULT_MAX_TOKEN_LENGTH))
    token_length = len(token.encode("utf-8"))
    if token_length > max_length:
        logger.info(
            "Auth rejected: token too large (%d bytes, limit %d)", token_length, max_length
        )
        raise TokenTooLarge()

    logger.debug("Auth: token received (length: %d bytes)", token_length)

    secret = current_app.config.get("JWT_SECRET")
    if not secret:
        logger.error("Auth rejected: JWT secret not configured")
        raise ServerMisconfigured()

    try:
        payload = decode_token(
            token,
            secret,
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
            leeway=int(current_app.config.get("JWT_CLOCK_SKEW_SECONDS", 30)),
        )
    except jwt.InvalidTokenError as exc:
        logger.info("Auth rejected: %s", exc)
        raise InvalidToken() from exc

    logger.debug("Auth: token verified for user %s", payload["username"])
    return payload


def require_auth(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that enforces Bearer-token authentication on a view.

    On success ``g.username`` and ``g.token_payload`` are populated before
    the wrapped view runs; on failure the raised :class:`ApiError` is turned
    into a JSON response by the centralized error handlers.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        payload = verify_request()
        g.token_payload = payload
        g.username = payload["username"]
        return view_func(*args, **kwargs)

    return wrapper
