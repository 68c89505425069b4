"""Request helpers shared by the resource blueprints."""
from __future__ import annotations
from typing import Any, Dict

from flask import current_app, request

from identity_api.core.directory import DirectoryService
from identity_api.core.exceptions import ValidationError

DIRECTORY_SERVICE_KEY = "DIRECTORY_SERVICE"


def get_directory() -> DirectoryService:
    """Directory service injected by ``create_app``."""
    return current_app.config[DIRECTORY_SERVICE_KEY]


def json_body() -> Dict[str, Any]:
    """Return the request body as a JSON object.

    Raises:
        ValidationError: If the body is missing, not JSON, or not an object
    """
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload
