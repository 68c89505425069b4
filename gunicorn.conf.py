"""Gunicorn configuration file.

Values come from the same environment variables as the application
settings so the server and the per-request deadline agree:

- PORT          -> bind 0.0.0.0:$PORT
- WRITE_TIMEOUT -> worker request timeout
- IDLE_TIMEOUT  -> keep-alive between requests

Workers are threaded (``gthread``); SIGTERM triggers a graceful shutdown
that lets in-flight requests finish for up to ``graceful_timeout`` seconds.
"""
import math
import os

from identity_api.config.settings import (
    DEFAULT_IDLE_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_WRITE_TIMEOUT,
    parse_duration,
)

bind = f"0.0.0.0:{os.environ.get('PORT', DEFAULT_PORT)}"
wsgi_app = "identity_api.wsgi:app"

worker_class = "gthread"
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
threads = int(os.environ.get("GUNICORN_THREADS", "8"))

# Worker timeout stays above the request deadline so the app answers 504 first.
timeout = math.ceil(parse_duration(os.environ.get("WRITE_TIMEOUT"), DEFAULT_WRITE_TIMEOUT)) + 5
keepalive = math.ceil(parse_duration(os.environ.get("IDLE_TIMEOUT"), DEFAULT_IDLE_TIMEOUT))
graceful_timeout = 20

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("GUNICORN_LOG_LEVEL", "info")


def when_ready(server):
    server.log.info(f"Identity API listening on {bind} (graceful_timeout={graceful_timeout}s)")


def post_fork(server, worker):
    """Called just after a worker has been forked."""
    worker.log.info(f"Worker spawned (pid={worker.pid}, threads={threads})")


def worker_int(worker):
    worker.log.info(f"Worker interrupted, shutting down (pid={worker.pid})")
