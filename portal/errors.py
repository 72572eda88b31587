"""Error types raised by the service layer and their JSON mapping."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."


class PortalError(Exception):
    """Base class for errors that map onto a client-facing HTTP response."""

    status_code = 500
    default_message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "status": "Error"}
        payload.update(self.extra)
        return payload


class ClientInputError(PortalError):
    status_code = 400
    default_message = "Please check your input and try again."


class ConflictError(PortalError):
    status_code = 409
    default_message = "Resource already exists."


class AuthError(PortalError):
    """Missing or invalid admin credentials. The message never says which check failed."""

    status_code = 401
    default_message = "Authentication required"


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Not found."


class RateLimitedError(PortalError):
    status_code = 429
    default_message = "Too many requests. Please try again later."


class UpstreamUnavailable(PortalError):
    status_code = 503
    default_message = "Service temporarily unavailable. Please try again later."


def error_response(error: PortalError) -> Tuple[Response, int]:
    """Return the ``(response, status)`` pair for a portal error."""
    return jsonify(error.to_dict()), error.status_code


def register_error_handlers(app: Flask) -> None:
    """Map every exception escaping a view onto a JSON response."""

    @app.errorhandler(PortalError)
    def _handle_portal_error(error: PortalError):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message, exc_info=error.__cause__)
        return error_response(error)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        response = error.get_response()
        response.data = json.dumps({"error": error.name, "status": "Error"})
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        app.logger.exception("Unhandled error while processing %s", type(error).__name__)
        return jsonify(error=INTERNAL_ERROR_MESSAGE, status="Error"), 500
