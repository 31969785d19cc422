"""
Error taxonomy and centralized JSON error handling.

Route handlers, the auth gate and the validators raise :class:`ApiError`
subclasses instead of building error responses themselves.  A single set
of Flask error handlers registered by :func:`register_error_handlers` turns
every failure into the same envelope::

    {"success": false, "error": {"message": ..., "validationErrors": [...], "stack": ...}}

``validationErrors`` only appears for validation failures and ``stack`` only
when ``INCLUDE_ERROR_STACK`` is set (the development config).
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from flask import Flask, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        validation_errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.validation_errors = validation_errors


class ValidationError(ApiError):
    status_code = 400
    default_message = "Validation failed"


class Unauthenticated(ApiError):
    status_code = 401
    default_message = "No token, authorization denied"


class InvalidToken(ApiError):
    status_code = 401
    default_message = "Token is not valid"


class InvalidCredentials(ApiError):
    status_code = 401
    default_message = "Invalid username or password"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class TokenTooLarge(ApiError):
    status_code = 431
    default_message = "Token is too large"


class ServerMisconfigured(ApiError):
    status_code = 500
    default_message = "Server configuration error"


def error_envelope(
    message: str,
    *,
    validation_errors: list[dict[str, str]] | None = None,
    stack: str | None = None,
) -> dict[str, Any]:
    """Build the ``{"success": false, "error": {...}}`` response body."""
    error: dict[str, Any] = {"message": message}
    if validation_errors:
        error["validationErrors"] = validation_errors
    if stack and current_app.config.get("INCLUDE_ERROR_STACK"):
        error["stack"] = stack
    return {"success": False, "error": error}


def _stack_of(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def register_error_handlers(app: Flask) -> None:
    """
    Install the JSON error handlers on *app*.

    Three layers are covered: the project's own :class:`ApiError` family,
    werkzeug ``HTTPException`` raised by Flask itself (unknown route, wrong
    method, oversized body) and finally any unexpected exception, which is
    logged with its traceback and reported as a generic 500.
    """

    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError) -> tuple[Response, int]:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, exc.message)
        else:
            logger.warning(
                "%s %s -> %s %s", request.method, request.path, exc.status_code, exc.message
            )
        body = error_envelope(
            exc.message,
            validation_errors=exc.validation_errors,
            stack=_stack_of(exc),
        )
        return jsonify(body), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException) -> tuple[Response, int]:
        status_code = exc.code or 500
        if status_code == 404:
            message = f"Not Found - {request.full_path.rstrip('?')}"
        else:
            message = exc.description or exc.name
        body = error_envelope(message)
        response = jsonify(body)
        # Keep Allow on 405 responses.
        for header, value in exc.get_headers():
            if header.lower() == "allow":
                response.headers[header] = value
        return response, status_code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception) -> tuple[Response, int]:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        body = error_envelope("Internal Server Error", stack=_stack_of(exc))
        return jsonify(body), 500
