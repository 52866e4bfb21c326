"""
Application services: the analysis flow and report retrieval.
"""
from .analysis_handler import AnalysisHandler
from .report_service import ReportService

__all__ = ['AnalysisHandler', 'ReportService']
