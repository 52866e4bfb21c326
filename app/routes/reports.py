"""
Report retrieval routes.
Serves stored analyses to the report page.
"""
import logging
from flask import Blueprint, current_app

from app.errors import AnalysisError
from utils.response_helpers import (
    analysis_error_response,
    error_response,
    internal_error,
    json_response,
)

logger = logging.getLogger(__name__)

reports_bp = Blueprint('reports', __name__)


@reports_bp.route('/reports/<report_id>', methods=['GET'])
def get_report(report_id: str):
    """
    Get a stored report with quote highlights.

    Returns:
        {"id", "createdAt", "report", "highlights"} or 404
    """
    report_service = current_app.extensions['feedback_insights']['reports']

    try:
        report = report_service.get_report(report_id)
    except AnalysisError as e:
        logger.error(f"Error loading report {report_id}: {e.message}")
        return analysis_error_response(e)
    except Exception as e:
        return internal_error(e, 'get_report')

    if report is None:
        return error_response('Report not found.', 404)

    return json_response(report, 200)
