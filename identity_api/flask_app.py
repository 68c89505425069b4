"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints, middleware, and configuration.
"""
from __future__ import annotations
import logging
import uuid
from typing import Optional

from flask import Flask, g, has_request_context, request

from identity_api.api.helpers import DIRECTORY_SERVICE_KEY
from identity_api.config import AppConfig, load_settings
from identity_api.core import deadline
from identity_api.core.directory import DirectoryService
from identity_api.core.okta import OktaClient

API_PREFIX = "/api/v1"
REQUEST_ID_HEADER = "X-Request-Id"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [request_id=%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    """Inject the current request id (or ``-``) into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = "-"
        if has_request_context():
            request_id = g.get("request_id", "-")
        record.request_id = request_id
        return True


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root logger once per process."""
    root = logging.getLogger()
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
    root.setLevel(level)


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(config: Optional[AppConfig] = None, client: Optional[OktaClient] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        config: Settings (loaded from the environment when omitted)
        client: Okta client to share (built from ``config`` when omitted)
    """
    cfg = config if config is not None else load_settings()
    configure_logging()

    app = Flask(__name__)
    app.config["APP_CONFIG"] = cfg

    okta_client = client if client is not None else OktaClient(cfg.okta_base_url, cfg.okta_api_token)
    app.config[DIRECTORY_SERVICE_KEY] = DirectoryService(okta_client)

    # Register blueprints
    from identity_api.api import errors, groups, health, roles, users

    app.register_blueprint(health.bp)
    app.register_blueprint(users.bp, url_prefix=API_PREFIX)
    app.register_blueprint(groups.bp, url_prefix=API_PREFIX)
    app.register_blueprint(roles.bp, url_prefix=API_PREFIX)

    errors.register_error_handlers(app)
    _register_middleware(app, cfg)

    app.logger.info(f"Identity API registered at {API_PREFIX} (okta={cfg.okta_base_url})")
    return app


def _register_middleware(app: Flask, cfg: AppConfig):
    """Register request id and deadline handling."""

    @app.before_request
    def open_request_context() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.deadline_token = deadline.open_deadline(cfg.write_timeout)

    @app.after_request
    def add_request_id(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.teardown_request
    def close_request_context(_exc) -> None:
        token = g.pop("deadline_token", None)
        if token is not None:
            deadline.close_deadline(token)


if __name__ == "__main__":
    settings = load_settings()
    create_app(settings).run(host="0.0.0.0", port=settings.port, debug=True)
