"""
Configuration classes for the task manager API.

Follows the same class-based layout used throughout the project: a shared
``Config`` base holds defaults read from the environment, and the
``DevelopmentConfig`` / ``TestingConfig`` / ``ProductionConfig`` subclasses
override only what differs.  ``get_config`` resolves the right class from an
explicit name or the ``FLASK_ENV`` variable.

A local ``.env`` file is loaded (without overriding real environment
variables) so developers can keep the JWT secret and mock credentials out of
their shell profile.

Key Concepts Demonstrated:
- Inheritance-based configuration hierarchy
- Environment variable overrides with documented local fallbacks
- Single mock credential pair sourced from configuration
- JWT settings (secret, expiry, clock skew, token size ceiling)
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_flag(name: str, default: bool) -> bool:
    """Interpret common truthy strings (``1``, ``true``, ``yes``, ``on``)."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Base configuration shared by all environments.

    Attributes:
        SECRET_KEY: Flask signing key (unused by the stateless API but
            required by some Flask internals).
        JWT_SECRET: HMAC secret used to sign and verify bearer tokens.
            ``None`` means "not configured" and makes login fail with a
            server misconfiguration error.
        JWT_EXPIRY_SECONDS: Lifetime of a freshly issued token.
        JWT_CLOCK_SKEW_SECONDS: Leeway applied to ``exp`` / ``iat`` checks.
        JWT_MAX_TOKEN_LENGTH: Tokens longer than this are refused before
            any cryptographic work is attempted.
        MOCK_USER / MOCK_PASSWORD: The single accepted credential pair.
        FRONTEND_URL / ALLOWED_ORIGIN: CORS origins for dev and production.
        MAX_CONTENT_LENGTH: Upper bound on request bodies (bytes).
        LOG_REQUESTS: Emit per-request header diagnostics.
        INCLUDE_ERROR_STACK: Attach a traceback to error responses.  Only
            development turns this on.
    """

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "task-manager-dev-secret-change-in-production"
    )

    JWT_SECRET: str | None = os.environ.get("JWT_SECRET") or None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_SECONDS: int = int(os.environ.get("JWT_EXPIRY_SECONDS", "3600"))
    # Tolerate minor clock differences when checking exp/iat.
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "30"))
    JWT_MAX_TOKEN_LENGTH: int = int(os.environ.get("JWT_MAX_TOKEN_LENGTH", "8192"))

    MOCK_USER: str = os.environ.get("MOCK_USER", "admin")
    MOCK_PASSWORD: str = os.environ.get("MOCK_PASSWORD", "changeme")

    BACKEND_PORT: int = int(os.environ.get("BACKEND_PORT", "3001"))
    FRONTEND_URL: str = os.environ.get("FRONTEND_URL", "http://localhost:3000")
    ALLOWED_ORIGIN: str = os.environ.get("ALLOWED_ORIGIN", "http://localhost:3000")
    CORS_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_HEADERS: list[str] = ["Content-Type", "Authorization"]
    CORS_MAX_AGE: int = 86400

    MAX_CONTENT_LENGTH: int = int(os.environ.get("MAX_CONTENT_LENGTH", str(10 * 1024)))
    LOG_REQUESTS: bool = _env_flag("LOG_REQUESTS", True)
    INCLUDE_ERROR_STACK: bool = False

    @classmethod
    def cors_origin(cls) -> str:
        """Return the origin the browser frontend is served from."""
        return cls.FRONTEND_URL


class DevelopmentConfig(Config):
    """
    Configuration for local development.

    Falls back to a well-known secret so ``flask run`` works out of the box.
    Never rely on this value outside a developer machine.
    """

    DEBUG: bool = True
    TESTING: bool = False
    INCLUDE_ERROR_STACK: bool = True
    JWT_SECRET: str | None = (
        os.environ.get("JWT_SECRET") or "dev-jwt-secret-change-me-before-any-real-deployment"
    )


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    Pins the secret and the mock credential pair so test results do not
    depend on whatever a developer exported in their shell.
    """

    DEBUG: bool = True
    TESTING: bool = True
    JWT_SECRET: str | None = os.environ.get(
        "TEST_JWT_SECRET", "test-jwt-secret-for-local-tests-0123456789"
    )
    MOCK_USER: str = os.environ.get("TEST_MOCK_USER", "admin")
    MOCK_PASSWORD: str = os.environ.get("TEST_MOCK_PASSWORD", "changeme")
    LOG_REQUESTS: bool = False


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    No secret fallback: a deployment without ``JWT_SECRET`` refuses to issue
    tokens instead of signing them with a guessable key.  CORS is narrowed
    to ``ALLOWED_ORIGIN`` and request diagnostics are off unless asked for.
    """

    DEBUG: bool = False
    TESTING: bool = False
    LOG_REQUESTS: bool = _env_flag("LOG_REQUESTS", False)

    @classmethod
    def cors_origin(cls) -> str:
        return cls.ALLOWED_ORIGIN


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or ``"production"``.
            When ``None``, the ``FLASK_ENV`` environment variable is
            consulted, falling back to ``"development"``.

    Returns:
        The configuration class (not an instance).  Unrecognised names
        resolve to ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
