"""
Unit tests for the analysis handler.
"""
import pytest
from unittest.mock import Mock

from app.errors import ClassificationError, InvalidInput, RateLimited, StorageError
from app.schemas.report import ClassificationResult, ReportPayload, ThemeEntry
from app.services.analysis_handler import AnalysisHandler
from services.memory_report_store import InMemoryReportStore
from utils.fingerprint import fingerprint_text
from utils.rate_limiter import LimitsRateLimiter


RESULT = ClassificationResult(
    themes=[
        ThemeEntry(
            category="Feature Request",
            sentiment="Neutral",
            summary="Users want CSV export.",
            quote="please add CSV export",
            count=2,
            priority="Medium",
        )
    ],
    overall_summary="CSV export is the top request.",
)


@pytest.fixture
def classifier():
    mock = Mock()
    mock.classify.return_value = RESULT
    return mock


@pytest.fixture
def store():
    return InMemoryReportStore()


@pytest.fixture
def handler(store, classifier):
    return AnalysisHandler(
        store=store,
        classifier=classifier,
        rate_limiter=LimitsRateLimiter(max_requests=10, window_seconds=60),
    )


def test_handle_creates_report(handler, store, classifier):
    """A new text is classified and stored under its fingerprint."""
    report_id = handler.handle('please add CSV export', '1.2.3.4')

    classifier.classify.assert_called_once_with('please add CSV export')
    row = store.get_by_id(report_id)
    assert row['source_text_hash'] == fingerprint_text('please add CSV export')
    payload = ReportPayload.model_validate(row['report_data'])
    assert payload.source_text == 'please add CSV export'
    assert payload.themes == RESULT.themes


def test_handle_is_idempotent(handler, classifier):
    """Identical text maps to one report and one classification."""
    first = handler.handle('please add CSV export', '1.2.3.4')
    second = handler.handle('please add CSV export', '5.6.7.8')

    assert first == second
    assert classifier.classify.call_count == 1


@pytest.mark.parametrize('submission', [None, '', '   ', '\n\t', 17, ['text']])
def test_handle_rejects_invalid_input(submission, classifier):
    """Invalid submissions never touch the store or the classifier."""
    store = Mock()
    handler = AnalysisHandler(store=store, classifier=classifier, rate_limiter=LimitsRateLimiter())

    with pytest.raises(InvalidInput):
        handler.handle(submission, '1.2.3.4')

    store.find_by_fingerprint.assert_not_called()
    store.insert.assert_not_called()
    classifier.classify.assert_not_called()


def test_rate_limit_checked_before_validation(classifier):
    """An exhausted caller is rejected even with invalid input."""
    store = Mock()
    limiter = Mock()
    limiter.admit.return_value = False
    handler = AnalysisHandler(store=store, classifier=classifier, rate_limiter=limiter)

    with pytest.raises(RateLimited):
        handler.handle('', '1.2.3.4')

    limiter.admit.assert_called_once_with('1.2.3.4')
    store.find_by_fingerprint.assert_not_called()
    classifier.classify.assert_not_called()


def test_eleventh_call_is_rate_limited(handler, classifier):
    """The 11th call in the window is rejected, dedup hits included."""
    for _ in range(10):
        handler.handle('please add CSV export', '1.2.3.4')

    with pytest.raises(RateLimited):
        handler.handle('please add CSV export', '1.2.3.4')

    assert classifier.classify.call_count == 1


def test_admitted_flag_skips_second_count(classifier, store):
    """A request already admitted by the route is not counted twice."""
    limiter = Mock()
    limiter.admit.return_value = True
    handler = AnalysisHandler(store=store, classifier=classifier, rate_limiter=limiter)

    handler.check_admission('1.2.3.4')
    handler.handle('please add CSV export', '1.2.3.4', admitted=True)

    assert limiter.admit.call_count == 1


def test_lookup_failure_stops_processing(classifier):
    """A lookup failure propagates and the classifier is never invoked."""
    store = Mock()
    store.find_by_fingerprint.side_effect = StorageError('Could not query database.')
    handler = AnalysisHandler(store=store, classifier=classifier, rate_limiter=LimitsRateLimiter())

    with pytest.raises(StorageError):
        handler.handle('please add CSV export', '1.2.3.4')

    classifier.classify.assert_not_called()
    store.insert.assert_not_called()


def test_classification_failure_writes_nothing(handler, store, classifier):
    """A classification failure leaves no report behind."""
    classifier.classify.side_effect = ClassificationError('AI analysis failed with status: 500', status=500)

    with pytest.raises(ClassificationError):
        handler.handle('please add CSV export', '1.2.3.4')

    assert store.count() == 0


def test_concurrent_duplicate_insert_surfaces(classifier):
    """If another request stored the same text first, the insert error is raised."""
    store = InMemoryReportStore()
    handler = AnalysisHandler(store=store, classifier=classifier, rate_limiter=LimitsRateLimiter())

    def insert_competing_report(text):
        store.insert(fingerprint_text(text), {'overall_summary': 'competing'})
        return RESULT

    classifier.classify.side_effect = insert_competing_report

    with pytest.raises(StorageError):
        handler.handle('please add CSV export', '1.2.3.4')

    assert store.count() == 1
