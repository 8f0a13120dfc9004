from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .container import Container, build_container
from .extensions import limiter
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .courses.controller import register as register_courses
from .directory.controller import register as register_directory
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def parse_origins(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [s.strip() for s in value.split(",") if s.strip()]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["LOGIN_RATE_LIMIT"] = getattr(settings, "LOGIN_RATE_LIMIT", "50 per 15 minutes")
    app.config["RATELIMIT_ENABLED"] = bool(getattr(settings, "RATELIMIT_ENABLED", True))

    origins = parse_origins(getattr(settings, "ALLOWED_ORIGINS", None))
    if origins:
        CORS(app, origins=origins)
    else:
        logger.warning("ALLOWED_ORIGINS not set - allowing all origins")
        CORS(app)

    limiter.init_app(app)

    if container is None:
        airtable_config = dict(getattr(settings, "AIRTABLE_CONFIG"))
        portal_config = dict(getattr(settings, "PORTAL_CONFIG"))
        if not airtable_config.get("api_key") or not airtable_config.get("base_id"):
            logger.warning("AIRTABLE_API_KEY or AIRTABLE_BASE_ID missing; Airtable calls will fail.")

        container = build_container(airtable_config=airtable_config, portal_config=portal_config)
        atexit.register(container.client.close)

        if bool(getattr(settings, "DIRECTORY_AUTO_REFRESH", True)):
            if not container.refresher.run_once():
                logger.error("Initial student load failed; retrying on the refresh schedule")
            container.refresher.start()
            atexit.register(container.refresher.shutdown)

    logger.info("[student-portal] settings=%s", settings_module)

    register_auth(app, container)
    register_directory(app, container)
    register_attendance(app, container)
    register_students(app, container)
    register_courses(app, container)

    return app
