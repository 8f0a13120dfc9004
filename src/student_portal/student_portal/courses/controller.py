from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import fetch_failure_response, json_error
from ..core.exceptions import FetchFailure
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/teacher/classes", endpoint="teacher_classes")
    def teacher_classes():
        try:
            classes = container.course_service.list_active_courses()
        except FetchFailure as e:
            return fetch_failure_response("Failed to fetch classes", e)
        except Exception:
            logger.exception("Classes fetch error")
            return json_error("Server error fetching classes", 500)

        return jsonify({"success": True, "classes": classes})
