"""WSGI entry point (for Gunicorn): ``gunicorn identity_api.wsgi:app``."""
from identity_api.flask_app import create_app

app = create_app()
