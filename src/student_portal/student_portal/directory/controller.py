from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import json_error
from ..core.exceptions import AuthenticationError, RefreshFailure, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

MASTER_HEADER = "X-Portal-Master"


def register(app: Flask, container: Container) -> None:
    @app.route("/health", endpoint="health")
    def health():
        status = container.directory.status
        return jsonify(
            {
                "status": "ok",
                "message": "Server is running",
                "directory": {
                    "entries": status.entry_count,
                    "lastRefresh": status.last_success_at.isoformat() if status.last_success_at else None,
                    "lastError": status.last_error,
                },
            }
        )

    @app.route("/admin/directory/refresh", methods=["POST"], endpoint="refresh_directory")
    def refresh_directory():
        try:
            container.auth_service.authenticate_teacher(request.headers.get(MASTER_HEADER, ""))
        except (AuthenticationError, ValidationError):
            return json_error("Invalid teacher password", 401)

        try:
            count = container.directory.refresh()
        except RefreshFailure as exc:
            logger.error("On-demand directory refresh failed: %s", exc)
            return json_error("Directory refresh failed", 502, details=str(exc))

        logger.info("Directory refreshed on demand (%d entries)", count)
        return jsonify({"success": True, "entries": count})
