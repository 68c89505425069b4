"""JSON envelope shared by every endpoint.

Success: ``{"status": "success", "message": ..., "data": ...}``
Failure: ``{"status": "error", "code": "API_ERROR", "message": ..., "details": {...}}``
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from flask import Response, jsonify

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
ERROR_CODE = "API_ERROR"


def respond_success(message: str, data: Any = None, status: int = 200) -> tuple[Response, int]:
    return jsonify({"status": STATUS_SUCCESS, "message": message, "data": data}), status


def respond_error(message: str, status: int, details: Optional[Dict[str, Any]] = None) -> tuple[Response, int]:
    body = {
        "status": STATUS_ERROR,
        "code": ERROR_CODE,
        "message": message,
        "details": details or {},
    }
    return jsonify(body), status

