"""
Health check endpoint.
"""
from flask import Blueprint, jsonify, current_app
from datetime import datetime, timezone

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """
    Health check endpoint.

    Returns:
        Status, timestamp, active storage backend and the form's word ceiling
    """
    services = current_app.extensions['feedback_insights']
    return jsonify({
        'status': 'ok',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'service': 'Feedback Insights API',
        'version': '2.0.0',
        'store': services['store'].backend_name,
        'maxWords': current_app.config['MAX_WORDS']
    }), 200
