from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

REPORT_SCHEMA_VERSION = 1


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ThemeEntry(BaseModel):
    """One grouped theme found in the submitted feedback."""
    category: str
    sentiment: Sentiment
    summary: str
    quote: str
    count: int = Field(..., ge=0)
    priority: Priority


class ClassificationResult(BaseModel):
    """
    Shape the classification capability must return.
    """
    themes: List[ThemeEntry] = Field(default_factory=list)
    overall_summary: str


class ReportPayload(ClassificationResult):
    """
    Versioned payload stored in ``reports.report_data``.
    ``source_text`` is kept so the report page can highlight quotes.
    """
    schema_version: int = Field(REPORT_SCHEMA_VERSION, ge=1)
    source_text: Optional[str] = None

    @classmethod
    def from_classification(cls, result: ClassificationResult, source_text: str) -> "ReportPayload":
        return cls(
            themes=result.themes,
            overall_summary=result.overall_summary,
            source_text=source_text,
        )


class QuoteHighlight(BaseModel):
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    theme_index: int = Field(..., ge=0)

    def to_response(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "themeIndex": self.theme_index}


class StoredReport(BaseModel):
    """A row of the reports table as read back from the store."""
    id: str
    source_text_hash: str
    report_data: Dict[str, Any]
    created_at: Optional[datetime] = None
