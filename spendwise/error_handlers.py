"""JSON error handlers for the application."""

from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import CSRFError

from .core.types import APIResponse
from .errors import AppError

error_handlers_bp = Blueprint("error_handlers", __name__)


def _error_response(message, status_code):
    body: APIResponse = {"success": False, "error": message}
    return jsonify(body), status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles application errors, including validation and conflict errors."""
    if error.status_code >= 500:
        current_app.logger.error(f"{type(error).__name__}: {error.message}")
    else:
        current_app.logger.warning(f"{type(error).__name__}: {error.message}")
    return _error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return _error_response("Not found.", 404)


@error_handlers_bp.app_errorhandler(413)
def handle_413(e):
    """Handles uploads above MAX_CONTENT_LENGTH."""
    return _error_response("The uploaded file is too large.", 413)


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _error_response("An unexpected error occurred.", 500)


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """
    Handles CSRF errors, which usually indicate a session timeout or invalid form submission.
    """
    current_app.logger.warning(f"CSRF Error: {e.description}")
    return _error_response(
        "Your session may have expired. Please try your action again.", 400
    )
