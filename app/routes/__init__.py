"""
Routes module for the Feedback Insights API.
"""
from .analysis import analysis_bp
from .reports import reports_bp
from .health import health_bp

__all__ = ['analysis_bp', 'reports_bp', 'health_bp']
