"""
Analysis endpoint routes.
Accepts pasted feedback and returns the id of the stored report.
"""
import logging
from flask import Blueprint, request, current_app
from werkzeug.exceptions import BadRequest

from app.errors import AnalysisError
from utils.rate_limiter import get_caller_address
from utils.response_helpers import (
    analysis_error_response,
    error_response,
    internal_error,
    json_response,
)

logger = logging.getLogger(__name__)

analysis_bp = Blueprint('analysis', __name__)


def get_handler():
    """Return the AnalysisHandler wired by the app factory."""
    return current_app.extensions['feedback_insights']['handler']


@analysis_bp.route('/analyze', methods=['POST'])
def analyze():
    """
    Main analysis endpoint.

    Request body:
    {
        "text": "The export button crashes the app..."
    }

    Returns:
        {"jobId": "<report id>"} on success, {"error": "..."} otherwise
    """
    handler = get_handler()
    caller_address = get_caller_address(request)

    try:
        # Requests with unparsable bodies still count against the caller's
        # window, so admission runs here and handle() is told not to repeat it
        handler.check_admission(caller_address)

        try:
            body = request.get_json(force=True)
        except BadRequest:
            return error_response('Invalid JSON body', 400)

        text = body.get('text') if isinstance(body, dict) else None
        report_id = handler.handle(text, caller_address, admitted=True)

        return json_response({'jobId': report_id}, 200)

    except AnalysisError as e:
        if e.status_code >= 500:
            logger.error(f"Error during analysis: {e.__class__.__name__}: {e.message}")
        return analysis_error_response(e)
    except Exception as e:
        return internal_error(e, 'analyze')
