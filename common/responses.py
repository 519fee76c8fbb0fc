"""Standardized JSON response helpers."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

from .errors import AppError, ensure_app_error
from .logging import get_logger

logger = get_logger("apd_units.responses")


def ok(data: Any, *, status: int = 200) -> Response:
    """Return a success envelope."""

    payload = {"success": True, "data": data}
    response = jsonify(payload)
    response.status_code = status
    return response


def fail(error: AppError | Exception, *, status: int | None = None) -> Response:
    """Return a standardized failure envelope.

    Plain exceptions are converted with :func:`ensure_app_error` so their
    internals never reach the client.
    """

    app_error = ensure_app_error(error, fallback_code="internal_error")
    if app_error.status_code >= 500:
        logger.error("request failed: %s (%s)", app_error.message, app_error.code)
    payload = {"success": False, "error": app_error.to_dict()}
    response = jsonify(payload)
    response.status_code = status or app_error.status_code
    return response


__all__ = ["ok", "fail"]
