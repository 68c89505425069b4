"""Health check endpoints."""
from flask import Blueprint

from .helpers import get_directory
from .responses import respond_success

bp = Blueprint("health", __name__)


@bp.route("/health")
def health_check():
    """Basic liveness endpoint (no IdP call)."""
    return respond_success("ok")


@bp.route("/ready")
def readiness_check():
    """Readiness: the IdP must answer the org settings probe.

    A failing probe surfaces as RemoteUnavailableError (502) through the
    regular error envelope.
    """
    get_directory().check_connection()
    return respond_success("ready")
