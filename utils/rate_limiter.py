"""
Admission control (rate limiting) keyed by caller address.

Counters live in a ``limits`` storage: memory:// keeps them in the worker
process, redis:// and friends let several workers share one budget.
"""
import logging
from typing import Optional

from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from app.interfaces.rate_limiter import IRateLimiter

logger = logging.getLogger(__name__)

DEFAULT_CALLER_ADDRESS = '127.0.0.1'


class LimitsRateLimiter(IRateLimiter):
    """
    Fixed-window limiter backed by a ``limits`` storage URI.

    A window opens on the first hit from a key and lasts window_seconds;
    the first hit after it expires opens a fresh window. Expired keys are
    purged by the storage.
    """

    def __init__(
        self,
        storage_uri: str = 'memory://',
        max_requests: int = 10,
        window_seconds: int = 60,
        namespace: str = 'analyze',
    ):
        self.storage_uri = storage_uri
        self.namespace = namespace
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._item = RateLimitItemPerSecond(max_requests, window_seconds)
        self._storage = storage_from_string(storage_uri)
        self._strategy = FixedWindowRateLimiter(self._storage)

    def admit(self, key: str) -> bool:
        return self._strategy.hit(self._item, self.namespace, key)

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._storage.reset()
        else:
            self._strategy.clear(self._item, self.namespace, key)


def build_rate_limiter(config) -> IRateLimiter:
    """
    Create the limiter described by a config class.

    Args:
        config: Config class (RATE_LIMIT_COUNT, RATE_LIMIT_WINDOW_SECONDS, RATE_LIMIT_STORAGE_URI)

    Returns:
        limits-backed limiter on the configured storage
    """
    storage_uri = config.RATE_LIMIT_STORAGE_URI or 'memory://'
    if storage_uri != 'memory://':
        logger.info(f"Using shared rate limit storage: {storage_uri.split('://')[0]}")

    return LimitsRateLimiter(
        storage_uri=storage_uri,
        max_requests=config.RATE_LIMIT_COUNT,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
    )


def get_caller_address(request) -> str:
    """
    Resolve the caller address used as the rate limit key.

    Uses the first hop of X-Forwarded-For, then X-Real-IP, then the socket
    peer address, then a fixed fallback.
    """
    forwarded_for = request.headers.get('X-Forwarded-For')
    if forwarded_for:
        first_hop = forwarded_for.split(',')[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get('X-Real-IP')
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return request.remote_addr or DEFAULT_CALLER_ADDRESS
