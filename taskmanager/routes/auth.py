"""
Authentication endpoint.

Endpoints:
    POST /api/auth/login -- Exchange the mock credential pair for a JWT.

Key Concepts Demonstrated:
- Field-level validation before credential checks
- Deliberately vague ``"Invalid username or password"`` on mismatch
- Stateless token issuance (no server-side session record)
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, jsonify

from ..jwt import issue_token
from ..validation import get_json_object, raise_for_errors, validate_login_payload

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate against the configured mock account and issue a JWT.

    Returns:
        200 with ``{"success": true, "token": ...}`` on success.
        400 if either field is missing or not a string.
        401 if the credentials do not match.
        500 if the server has no signing secret.
    """
    data = get_json_object()
    raise_for_errors(validate_login_payload(data))

    config = current_app.config
    token = issue_token(
        data["username"],
        data["password"],
        expected_username=config["MOCK_USER"],
        expected_password=config["MOCK_PASSWORD"],
        secret=config.get("JWT_SECRET"),
        expiry_seconds=config["JWT_EXPIRY_SECONDS"],
        algorithm=config.get("JWT_ALGORITHM", "HS256"),
    )
    logger.info("Issued token for user %s", data["username"])
    return jsonify({"success": True, "token": token}), 200
