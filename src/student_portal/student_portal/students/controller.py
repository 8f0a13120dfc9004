from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import fetch_failure_response, json_error
from ..core.exceptions import FetchFailure, NotFoundError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/student/profile/<preferred_name>", endpoint="student_profile")
    def student_profile(preferred_name: str):
        try:
            profile = container.profile_service.compose_profile(preferred_name)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except FetchFailure as e:
            return fetch_failure_response("Failed to fetch student profile", e)
        except Exception as e:
            logger.exception("Student profile fetch error")
            return json_error("Server error fetching student profile", 500, message=str(e))

        return jsonify(
            {
                "success": True,
                "profile": {
                    "preferredName": profile.preferred_name,
                    "currentCourse": profile.current_course,
                    "percentMissedFE": profile.percent_missed_fe,
                    "percentMissedBE": profile.percent_missed_be,
                    "percentMissedTCF": profile.percent_missed_tcf,
                },
            }
        )
