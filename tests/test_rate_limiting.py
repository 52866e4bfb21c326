"""
Tests for rate limiting functionality.
"""
import time

import limits.storage.memory
import pytest
from unittest.mock import Mock
from flask import Flask, request
from app import create_app
from config import TestingConfig
from utils.rate_limiter import (
    LimitsRateLimiter,
    build_rate_limiter,
    get_caller_address,
)


class FakeClock:
    """Manually advanced stand-in for the time module used by limits' memory storage."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def time(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(limits.storage.memory, 'time', fake)
    return fake


@pytest.fixture
def limiter(clock):
    return LimitsRateLimiter(storage_uri='memory://', max_requests=10, window_seconds=60)


def test_first_ten_requests_admitted(limiter):
    """Requests up to the threshold are admitted."""
    assert all(limiter.admit('1.2.3.4') for _ in range(10))


def test_eleventh_request_rejected(limiter):
    """The 11th request within the window is rejected."""
    for _ in range(10):
        limiter.admit('1.2.3.4')
    assert limiter.admit('1.2.3.4') is False
    assert limiter.admit('1.2.3.4') is False


def test_window_expiry_resets_counter(limiter, clock):
    """The first request after the window expires succeeds."""
    for _ in range(11):
        limiter.admit('1.2.3.4')

    clock.advance(61)

    assert limiter.admit('1.2.3.4') is True


def test_window_is_fixed_not_sliding(limiter, clock):
    """A new window starts on the first request after expiry, discarding the old count."""
    limiter.admit('1.2.3.4')
    clock.advance(59)
    for _ in range(9):
        assert limiter.admit('1.2.3.4') is True
    assert limiter.admit('1.2.3.4') is False

    # Only 2 seconds after the burst, but the window opened 61 seconds ago
    clock.advance(2)
    assert all(limiter.admit('1.2.3.4') for _ in range(10))
    assert limiter.admit('1.2.3.4') is False


def test_window_boundary(limiter, clock):
    """The window covers window_seconds from its first request and no more."""
    for _ in range(10):
        limiter.admit('1.2.3.4')

    clock.advance(59.5)
    assert limiter.admit('1.2.3.4') is False

    clock.advance(0.5)
    assert limiter.admit('1.2.3.4') is True


def test_keys_are_independent(limiter):
    """Each caller address has its own counter."""
    for _ in range(11):
        limiter.admit('1.2.3.4')
    assert limiter.admit('5.6.7.8') is True


def test_reset(limiter):
    """Reset clears one key or all keys."""
    for _ in range(11):
        limiter.admit('1.2.3.4')
        limiter.admit('5.6.7.8')

    limiter.reset('1.2.3.4')
    assert limiter.admit('1.2.3.4') is True
    assert limiter.admit('5.6.7.8') is False

    limiter.reset()
    assert limiter.admit('5.6.7.8') is True


def test_expired_windows_are_purged(limiter, clock):
    """Windows of callers that never return do not accumulate."""
    for i in range(500):
        limiter.admit(f'10.0.{i // 256}.{i % 256}')

    clock.advance(3600)
    limiter.admit('1.2.3.4')

    counters = limiter._storage.storage
    deadline = time.monotonic() + 2
    while len(counters) > 1 and time.monotonic() < deadline:
        time.sleep(0.01)

    assert len(counters) == 1


def test_build_rate_limiter_memory():
    """memory:// builds an in-process limiter from config values."""
    built = build_rate_limiter(TestingConfig)
    assert isinstance(built, LimitsRateLimiter)
    assert built.storage_uri == 'memory://'
    assert built.max_requests == TestingConfig.RATE_LIMIT_COUNT
    assert built.window_seconds == TestingConfig.RATE_LIMIT_WINDOW_SECONDS

    assert all(built.admit('1.2.3.4') for _ in range(TestingConfig.RATE_LIMIT_COUNT))
    assert built.admit('1.2.3.4') is False


@pytest.mark.parametrize('headers, expected', [
    ({'X-Forwarded-For': '10.0.0.1'}, '10.0.0.1'),
    ({'X-Forwarded-For': '10.0.0.1, 172.16.0.1'}, '10.0.0.1'),
    ({'X-Real-IP': '10.0.0.2'}, '10.0.0.2'),
    ({'X-Forwarded-For': '10.0.0.1', 'X-Real-IP': '10.0.0.2'}, '10.0.0.1'),
    ({}, '127.0.0.1'),
])
def test_get_caller_address(headers, expected):
    """Caller address comes from proxy headers with a fixed fallback."""
    flask_app = Flask(__name__)
    with flask_app.test_request_context('/api/analyze', headers=headers):
        assert get_caller_address(request) == expected


def test_get_caller_address_uses_peer_address():
    """Without proxy headers the socket peer address is the key."""
    flask_app = Flask(__name__)
    with flask_app.test_request_context('/api/analyze', environ_base={'REMOTE_ADDR': '192.168.1.5'}):
        assert get_caller_address(request) == '192.168.1.5'


@pytest.fixture
def client():
    """Test client with a stub classifier."""
    classifier = Mock()
    classifier.model_name = 'test-model'
    app = create_app('testing', classifier=classifier)
    return app.test_client()


def test_rate_limit_on_analyze_endpoint(client):
    """The 11th request from one address gets a 429, even with a bad body."""
    for i in range(10):
        response = client.post('/api/analyze', json={'text': '   '})
        assert response.status_code == 400

    response = client.post(
        '/api/analyze',
        data='not json',
        content_type='application/json'
    )
    assert response.status_code == 429
    assert response.get_json() == {'error': 'Too many requests. Please try again in a minute.'}


def test_rate_limit_is_per_address(client):
    """Exhausting one address does not affect another."""
    for _ in range(11):
        client.post('/api/analyze', json={'text': ''}, headers={'X-Forwarded-For': '10.0.0.1'})

    blocked = client.post('/api/analyze', json={'text': ''}, headers={'X-Forwarded-For': '10.0.0.1'})
    allowed = client.post('/api/analyze', json={'text': ''}, headers={'X-Forwarded-For': '10.0.0.2'})

    assert blocked.status_code == 429
    assert allowed.status_code == 400


def test_unparsable_bodies_count_against_window(client):
    """Requests rejected for invalid JSON still use up the caller's budget."""
    for _ in range(10):
        response = client.post('/api/analyze', data='not json', content_type='application/json')
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Invalid JSON body'}

    response = client.post('/api/analyze', json={'text': 'Crashes on export'})
    assert response.status_code == 429
