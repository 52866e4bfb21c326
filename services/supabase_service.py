"""
Supabase service for report storage.
Reads and inserts rows of the reports table through PostgREST.

Expected table:
    create table reports (
        id uuid primary key default gen_random_uuid(),
        source_text_hash text unique not null,
        report_data jsonb not null,
        created_at timestamptz not null default now()
    );
"""
import logging
from typing import Dict, Any, Optional
from postgrest.exceptions import APIError
from supabase import create_client, Client

from config import Config
from app.errors import StorageError
from app.interfaces.report_store import IReportStore

logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes
NO_ROWS_CODE = 'PGRST116'
UNIQUE_VIOLATION_CODE = '23505'
INVALID_TEXT_REPRESENTATION_CODE = '22P02'


class SupabaseReportStore(IReportStore):
    """Report store backed by a Supabase table."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        table: Optional[str] = None,
        client: Optional[Client] = None,
    ):
        """
        Initialize Supabase client.

        Args:
            url: Project URL (defaults to Config.SUPABASE_URL)
            key: API key (defaults to Config.SUPABASE_KEY)
            table: Reports table name (defaults to Config.SUPABASE_REPORTS_TABLE)
            client: Pre-built client, mainly for tests
        """
        self.table_name = table or Config.SUPABASE_REPORTS_TABLE

        if client is not None:
            self.client = client
        else:
            url = url or Config.SUPABASE_URL
            key = key or Config.SUPABASE_KEY
            if not url or not key:
                raise ValueError("Supabase credentials not configured")
            self.client = create_client(url, key)

        logger.info(f"SupabaseReportStore initialized (table={self.table_name})")

    @property
    def backend_name(self) -> str:
        return 'supabase'

    def find_by_fingerprint(self, fingerprint: str) -> Optional[str]:
        """
        Look up an existing report ID by source text hash.

        Args:
            fingerprint: Hash of the submitted text

        Returns:
            Report ID or None
        """
        try:
            result = (
                self.client.table(self.table_name)
                .select('id')
                .eq('source_text_hash', fingerprint)
                .limit(1)
                .execute()
            )
        except APIError as e:
            if e.code == NO_ROWS_CODE:
                return None
            logger.error(f"Supabase fetch error: code={e.code} message={e.message}")
            raise StorageError('Could not query database.') from e
        except Exception as e:
            logger.error(f"Supabase fetch error: {e}", exc_info=True)
            raise StorageError('Could not query database.') from e

        if not result.data:
            return None
        return str(result.data[0]['id'])

    def insert(self, fingerprint: str, payload: Dict[str, Any]) -> str:
        """
        Insert a new report row.

        Args:
            fingerprint: Hash of the submitted text
            payload: report_data contents

        Returns:
            New report ID
        """
        record = {
            'report_data': payload,
            'source_text_hash': fingerprint,
        }

        try:
            result = self.client.table(self.table_name).insert(record).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION_CODE:
                logger.error(f"Supabase insert conflict: a report for hash {fingerprint} already exists")
            else:
                logger.error(f"Supabase insert error: code={e.code} message={e.message}")
            raise StorageError('Could not save analysis report.') from e
        except Exception as e:
            logger.error(f"Supabase insert error: {e}", exc_info=True)
            raise StorageError('Could not save analysis report.') from e

        if not result.data or result.data[0].get('id') is None:
            logger.error(f"Supabase insert returned no row: {result.data!r}")
            raise StorageError('Could not save analysis report.')

        return str(result.data[0]['id'])

    def get_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a report row by ID.

        Args:
            report_id: Report ID

        Returns:
            Row dict or None
        """
        try:
            result = (
                self.client.table(self.table_name)
                .select('id, source_text_hash, report_data, created_at')
                .eq('id', report_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            # A malformed id cannot match any row of a uuid column
            if e.code in (NO_ROWS_CODE, INVALID_TEXT_REPRESENTATION_CODE):
                return None
            logger.error(f"Supabase fetch error: code={e.code} message={e.message}")
            raise StorageError('Could not query database.') from e
        except Exception as e:
            logger.error(f"Supabase fetch error: {e}", exc_info=True)
            raise StorageError('Could not query database.') from e

        if not result.data:
            return None

        row = dict(result.data[0])
        row['id'] = str(row['id'])
        return row
