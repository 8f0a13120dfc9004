from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import fetch_failure_response, json_error
from ..core.exceptions import CourseWindowError, FetchFailure, NotFoundError
from ..container import Container
from .model import AttendanceRecord, StudentSummary

logger = logging.getLogger(__name__)


def _record_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "date": r.date.isoformat() if r.date else None,
        "course": list(r.course_ids) or None,
        "blockA": r.block("Block A"),
        "blockB": r.block("Block B"),
        "blockC": r.block("Block C"),
        "blockD": r.block("Block D"),
    }


def _summary_json(s: StudentSummary) -> dict:
    return {
        "preferredName": s.alias,
        "absences": s.absences,
        "tardies": s.tardies,
        "totalBlocks": s.total_blocks,
        "percentMissed": s.percent_missed,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/<preferred_name>", endpoint="attendance")
    def attendance(preferred_name: str):
        try:
            records = container.attendance_service.list_attendance(preferred_name)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except FetchFailure as e:
            return fetch_failure_response("Failed to fetch from Airtable", e)
        except Exception as e:
            logger.exception("Attendance fetch error")
            return json_error("Server error fetching attendance", 500, message=str(e))

        return jsonify({"success": True, "records": [_record_json(r) for r in records]})

    @app.route("/teacher/class/<path:class_name>", endpoint="class_summary")
    def class_summary(class_name: str):
        try:
            students = container.attendance_service.summarize_class_by_name(class_name)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except CourseWindowError as e:
            return json_error(str(e), 400)
        except FetchFailure as e:
            return fetch_failure_response("Failed to fetch class data", e)
        except Exception:
            logger.exception("Class summary error")
            return json_error("Server error fetching class summary", 500)

        return jsonify({"success": True, "students": [_summary_json(s) for s in students]})
