"""
Utility functions for the Feedback Insights backend.
"""
from .fingerprint import fingerprint_text
from .validators import validate_feedback_text, count_words
from .highlights import find_quote_highlights

__all__ = [
    'fingerprint_text',
    'validate_feedback_text',
    'count_words',
    'find_quote_highlights',
]
