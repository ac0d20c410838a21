import logging

from flask import jsonify
from flask_limiter import RateLimitExceeded
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

log = logging.getLogger("notes_api.error")


class ApiError(Exception):
    def __init__(self, message, status_code=400, code="bad_request", details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}


class ValidationError(ApiError):
    def __init__(self, message="Invalid request body.", details=None):
        super().__init__(message, 400, "validation_error", details)


class AuthenticationError(ApiError):
    def __init__(self, message="Invalid username or password"):
        super().__init__(message, 401, "invalid_credentials")


class Unauthenticated(ApiError):
    def __init__(self, message="Missing bearer token."):
        super().__init__(message, 401, "authorization_required")


class Forbidden(ApiError):
    def __init__(self, message="Invalid token."):
        super().__init__(message, 403, "token_invalid")


class NotFound(ApiError):
    def __init__(self, message="Not found.", details=None):
        super().__init__(message, 404, "not_found", details)


class Conflict(ApiError):
    def __init__(self, message="Conflict.", details=None):
        super().__init__(message, 409, "conflict", details)


class InternalError(ApiError):
    def __init__(self, message="Internal server error"):
        super().__init__(message, 500, "internal_error")


def json_error(message, status, code, details=None):
    return jsonify({"message": message, "code": code, "details": details or {}}), status


def render_error(e: ApiError):
    """Journalise puis rend une ApiError dans l'enveloppe JSON commune."""
    if e.status_code >= 500:
        log.error("api_error", extra={"code": e.code, "status": e.status_code}, exc_info=e)
    else:
        log.warning("api_error", extra={"code": e.code, "status": e.status_code, "error": e.message})
    return json_error(e.message, e.status_code, e.code, e.details)


def register_error_handlers(app):
    app.register_error_handler(ApiError, render_error)

    @app.errorhandler(SchemaValidationError)
    def handle_validation_error(e: SchemaValidationError):
        log.warning("validation_error", extra={"status": 400, "fields": sorted(e.messages)})
        return json_error("Invalid request body.", 400, "validation_error", e.messages)

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(e):
        log.warning("rate_limited", extra={"status": 429})
        return json_error("Rate limit exceeded.", 429, "rate_limited")

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Ex: 404 route inconnue, 405, 413…
        log.warning("http_error", extra={"status": e.code})
        return json_error(e.description or "HTTP error", e.code or 500, "http_error")

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        log.exception("unexpected_error")
        return json_error("Internal server error", 500, "internal_error")
