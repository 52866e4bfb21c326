"""
In-memory report store for local development and tests.
Mirrors the reports table: generated ids and a unique source_text_hash.
"""
from __future__ import annotations

import copy
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.errors import StorageError
from app.interfaces.report_store import IReportStore

logger = logging.getLogger(__name__)


class InMemoryReportStore(IReportStore):
    """Thread-safe dict-backed report store. Contents are lost on restart."""

    def __init__(self):
        self._rows: Dict[str, Dict[str, Any]] = {}
        self._by_fingerprint: Dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def backend_name(self) -> str:
        return 'memory'

    def find_by_fingerprint(self, fingerprint: str) -> Optional[str]:
        with self._lock:
            return self._by_fingerprint.get(fingerprint)

    def insert(self, fingerprint: str, payload: Dict[str, Any]) -> str:
        with self._lock:
            if fingerprint in self._by_fingerprint:
                logger.error(f"Insert conflict: a report for hash {fingerprint} already exists")
                raise StorageError('Could not save analysis report.')

            report_id = str(uuid.uuid4())
            self._rows[report_id] = {
                'id': report_id,
                'source_text_hash': fingerprint,
                'report_data': copy.deepcopy(payload),
                'created_at': datetime.now(timezone.utc).isoformat(),
            }
            self._by_fingerprint[fingerprint] = report_id
            return report_id

    def get_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._rows.get(report_id)
            return copy.deepcopy(row) if row is not None else None

    def count(self) -> int:
        """Returns the number of stored reports."""
        with self._lock:
            return len(self._rows)
