from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import json_error
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from ..extensions import limiter, login_rate_limit

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @limiter.limit(login_rate_limit)
    def login():
        body = request.get_json(silent=True) or {}
        preferred_name = body.get("preferredName")
        password = body.get("password")
        if not preferred_name or not password:
            return json_error("Preferred name and password are required", 400)

        try:
            result = container.auth_service.authenticate(str(preferred_name), str(password))
        except (AuthenticationError, ValidationError):
            return json_error("Invalid credentials", 401)
        except Exception:
            logger.exception("Login error")
            return json_error("Server error during login", 500)

        return jsonify(
            {
                "success": True,
                "staffOverride": result.staff_override,
                "student": {
                    "preferredName": result.alias,
                    "studentId": result.identity_token,
                },
            }
        )

    @app.route("/teacher/login", methods=["POST"], endpoint="teacher_login")
    @limiter.limit(login_rate_limit)
    def teacher_login():
        body = request.get_json(silent=True) or {}
        password = body.get("password")
        if not password:
            return json_error("Password is required", 400)

        try:
            container.auth_service.authenticate_teacher(str(password))
        except (AuthenticationError, ValidationError):
            return json_error("Invalid teacher password", 401)
        except Exception:
            logger.exception("Teacher login error")
            return json_error("Server error during login", 500)

        return jsonify({"success": True, "userType": "teacher"})
