"""
Validation utilities for inputs.
"""
from typing import Any


def validate_feedback_text(text: Any) -> bool:
    """
    Validate submitted feedback text.

    Args:
        text: Value of the "text" field from the request body

    Returns:
        True if text is a string with at least one non-whitespace character
    """
    return isinstance(text, str) and len(text.strip()) > 0


def count_words(text: str) -> int:
    """
    Count whitespace-separated words, the same way the submission form does.

    Args:
        text: Feedback text

    Returns:
        Number of words
    """
    if not text:
        return 0
    return len(text.split())
