from __future__ import annotations

import logging
from typing import Any

from app.errors import InvalidInput, RateLimited
from app.interfaces import IFeedbackClassifier, IRateLimiter, IReportStore
from app.schemas.report import ReportPayload
from utils.fingerprint import fingerprint_text
from utils.validators import count_words, validate_feedback_text

logger = logging.getLogger(__name__)


class AnalysisHandler:
    """
    Turns a feedback submission into a stored report and returns its id.

    Steps, each terminal on failure: admission control, validation,
    fingerprint, dedup lookup, classification, insert. Identical text
    (bit-for-bit) is classified at most once per successful insert; a
    concurrent identical submission may still classify twice, and the
    losing insert surfaces as StorageError.
    """

    def __init__(
        self,
        store: IReportStore,
        classifier: IFeedbackClassifier,
        rate_limiter: IRateLimiter,
    ):
        self.store = store
        self.classifier = classifier
        self.rate_limiter = rate_limiter

    def check_admission(self, caller_address: str) -> None:
        """Count the request against the caller's window; raise RateLimited when over."""
        if not self.rate_limiter.admit(caller_address):
            logger.warning(f"Rate limit exceeded for {caller_address}")
            raise RateLimited()

    def handle(self, submission: Any, caller_address: str, *, admitted: bool = False) -> str:
        """
        Analyze a submission.

        Args:
            submission: Feedback text from the request body
            caller_address: Rate limit key for the requester
            admitted: True when check_admission already ran for this request

        Returns:
            ID of the new or previously stored report

        Raises:
            RateLimited, InvalidInput, StorageError, ClassificationError
        """
        if not admitted:
            self.check_admission(caller_address)

        if not validate_feedback_text(submission):
            raise InvalidInput()

        text_hash = fingerprint_text(submission)

        existing_id = self.store.find_by_fingerprint(text_hash)
        if existing_id is not None:
            logger.info(f"Deduplication hit. Returning existing report ID: {existing_id}")
            return existing_id

        logger.info(f"Classifying new submission ({count_words(submission)} words, hash {text_hash})")
        result = self.classifier.classify(submission)

        payload = ReportPayload.from_classification(result, source_text=submission)
        report_id = self.store.insert(text_hash, payload.model_dump(mode='json'))

        logger.info(f"Successfully saved new report with ID: {report_id}")
        return report_id
