"""Entrypoint: `python app.py` for local development, `app:app` for a WSGI server."""

import importlib

from config import get_settings_module

from src.student_portal.student_portal.main import create_app

app = create_app()


if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    app.run(host="0.0.0.0", port=int(getattr(settings, "PORT", 3001)), use_reloader=False)
