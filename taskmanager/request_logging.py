"""Per-request header diagnostics, enabled outside production."""

from __future__ import annotations

import logging

from flask import Flask, request

logger = logging.getLogger(__name__)

REDACT_KEEP = 10


def redact_authorization(value: str) -> str:
    """Keep only the first and last few characters of a credential."""
    if len(value) <= 2 * REDACT_KEEP:
        return value
    return f"{value[:REDACT_KEEP]}...{value[-REDACT_KEEP:]}"


def header_size_report(headers: list[tuple[str, str]]) -> tuple[list[str], int]:
    """
    Describe each header with its byte size.

    Returns:
        ``(lines, total_bytes)`` where each line reads
        ``"<name>: <value> (size: N bytes)"`` and Authorization values are
        redacted.
    """
    lines = []
    total = 0
    for key, value in headers:
        size = len(f"{key}: {value}".encode("utf-8"))
        total += size
        shown = redact_authorization(value) if key.lower() == "authorization" else value
        lines.append(f"{key}: {shown} (size: {size} bytes)")
    return lines, total


def init_request_logging(app: Flask) -> None:
    """Register a ``before_request`` hook when ``LOG_REQUESTS`` is on."""
    if not app.config.get("LOG_REQUESTS"):
        return

    @app.before_request
    def log_request_details() -> None:
        lines, total = header_size_report(list(request.headers.items()))
        logger.debug(
            "%s %s headers:\n  %s\nTotal headers size: %d bytes",
            request.method,
            request.full_path.rstrip("?"),
            "\n  ".join(lines),
            total,
        )
