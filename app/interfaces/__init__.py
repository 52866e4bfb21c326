"""
Service interfaces for the analysis backend.
Following SOLID principles - Dependency Inversion (DIP) and Interface Segregation (ISP).
"""
from .report_store import IReportStore
from .feedback_classifier import IFeedbackClassifier
from .rate_limiter import IRateLimiter

__all__ = [
    'IReportStore',
    'IFeedbackClassifier',
    'IRateLimiter',
]
