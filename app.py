"""Development entry point: ``python app.py``.

In production run behind a WSGI server, e.g. ``gunicorn "app:app"``;
TLS and static files are handled by the fronting proxy.
"""

import importlib

from config import get_settings_module

from src.signature_attendance.signature_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
