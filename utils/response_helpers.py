"""
Response helpers for standardized API responses.
Every error body has the form {"error": <message>}.
"""
import logging
from typing import Any, Dict, Tuple
from flask import jsonify, Response

from app.errors import AnalysisError

logger = logging.getLogger(__name__)


def json_response(payload: Dict[str, Any], status_code: int = 200) -> Tuple[Response, int]:
    """Serialize payload with the given status."""
    return jsonify(payload), status_code


def error_response(error: str, status_code: int = 400) -> Tuple[Response, int]:
    """
    Create a standardized error response.

    Args:
        error: Error message for the client
        status_code: HTTP status code (default 400)

    Returns:
        Tuple of (jsonify response, status code)
    """
    return jsonify({"error": error}), status_code


def analysis_error_response(exc: AnalysisError) -> Tuple[Response, int]:
    """Map a domain error to its client message and status."""
    return error_response(exc.message, exc.status_code)


def internal_error(exception: Exception, context: str = "") -> Tuple[Response, int]:
    """
    Create an internal server error response.
    Logs the full exception but returns a sanitized message to the client.

    Args:
        exception: The caught exception
        context: Additional context for logging

    Returns:
        Sanitized error response (no exception details exposed)
    """
    logger.error(f"Internal error in {context}: {exception}", exc_info=True)
    return error_response(AnalysisError.default_message, 500)
