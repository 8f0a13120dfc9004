from __future__ import annotations

from flask import jsonify

from ..core.exceptions import FetchFailure


def json_error(message: str, status: int, **extra):
    payload = {"error": message}
    payload.update(extra)
    return jsonify(payload), status


def fetch_failure_response(message: str, exc: FetchFailure):
    """502 carrying the store's status/body for diagnostics."""
    return json_error(message, 502, upstreamStatus=exc.status, details=exc.body)
