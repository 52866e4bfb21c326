"""
Services module for the Feedback Insights backend.
"""
from .openai_service import OpenAIService
from .supabase_service import SupabaseReportStore
from .memory_report_store import InMemoryReportStore

__all__ = [
    'OpenAIService',
    'SupabaseReportStore',
    'InMemoryReportStore',
]
