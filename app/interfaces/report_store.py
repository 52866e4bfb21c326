"""
Report Store Interface.
Abstracts persistence of analysis reports so the handler does not depend on
Supabase directly.

Implementations:
- SupabaseReportStore (reports table over PostgREST)
- InMemoryReportStore (local development and tests)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IReportStore(ABC):
    """
    Insert/read access to reports keyed by the fingerprint of their source text.

    The handler only ever inserts or reads; no update or delete is exposed.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Short name of the storage backend (reported by the health check)."""
        pass

    @abstractmethod
    def find_by_fingerprint(self, fingerprint: str) -> Optional[str]:
        """
        Look up an existing report by fingerprint.

        Args:
            fingerprint: Hash of the submitted text

        Returns:
            Report ID, or None if no report has this fingerprint

        Raises:
            StorageError: If the lookup failed for any reason other than "not found"
        """
        pass

    @abstractmethod
    def insert(self, fingerprint: str, payload: Dict[str, Any]) -> str:
        """
        Insert a new report.

        Args:
            fingerprint: Hash of the submitted text (unique)
            payload: Report payload to store as report_data

        Returns:
            Store-generated report ID

        Raises:
            StorageError: If the insert failed, including a duplicate fingerprint
        """
        pass

    @abstractmethod
    def get_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a stored report row.

        Returns:
            Dict with id, source_text_hash, report_data and created_at, or None

        Raises:
            StorageError: If the lookup failed for any reason other than "not found"
        """
        pass
