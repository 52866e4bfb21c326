"""
Error taxonomy for the analysis flow.

Each error carries the HTTP status it maps to and a message that is safe to
return to the client. Upstream details belong in the server log, not here.
"""
from typing import Optional


class AnalysisError(Exception):
    """Base class for failures surfaced by the analysis endpoints."""

    status_code: int = 500
    default_message: str = 'An unexpected error occurred.'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AnalysisError):
    """Malformed request body or missing/blank text."""
    status_code = 400
    default_message = 'Input text is required.'


class RateLimited(AnalysisError):
    """Caller exceeded the admission-control window."""
    status_code = 429
    default_message = 'Too many requests. Please try again in a minute.'


class ClassificationError(AnalysisError):
    """The classification capability failed or returned an unexpected shape."""
    default_message = 'Failed to get a valid analysis from the AI.'

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class StorageError(AnalysisError):
    """A report store operation failed for a reason other than "not found"."""
    default_message = 'Could not query database.'
