from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.errors import StorageError
from app.interfaces import IReportStore
from app.schemas.report import ReportPayload, StoredReport
from utils.highlights import find_quote_highlights

logger = logging.getLogger(__name__)


class ReportService:
    """Read side of the reports table, as consumed by the report page."""

    def __init__(self, store: IReportStore):
        self.store = store

    def get_report(self, report_id: str) -> Optional[Dict[str, Any]]:
        """
        Load a report and validate its payload.

        Returns:
            Response dict with the payload and quote highlights, or None if unknown

        Raises:
            StorageError: If the store failed or the stored payload is malformed
        """
        row = self.store.get_by_id(report_id)
        if row is None:
            return None

        try:
            stored = StoredReport.model_validate(row)
            payload = ReportPayload.model_validate(stored.report_data)
        except ValidationError as e:
            logger.error(f"Report {report_id} failed schema validation: {e}")
            raise StorageError('Stored report is malformed.') from e

        highlights = find_quote_highlights(payload.themes, payload.source_text)

        return {
            'id': stored.id,
            'createdAt': stored.created_at.isoformat() if stored.created_at else None,
            'report': payload.model_dump(mode='json'),
            'highlights': [h.to_response() for h in highlights],
        }
