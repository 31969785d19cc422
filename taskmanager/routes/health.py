"""Liveness endpoints polled by load balancers and the dev tooling."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/", methods=["GET", "HEAD"])
def root() -> tuple[str, int, dict[str, str]]:
    """Plain-text ``OK`` for probes that do not speak JSON."""
    return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}


@health_bp.route("/api/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Return ``{"status": "ok"}``; public, no token required."""
    return jsonify({"status": "ok"}), 200
