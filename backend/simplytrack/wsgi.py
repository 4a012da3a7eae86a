"""WSGI entrypoint (``gunicorn simplytrack.wsgi:app``)."""

from simplytrack import create_app

app = create_app()
