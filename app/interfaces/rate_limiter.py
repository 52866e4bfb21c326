"""
Admission Control Interface.
Lets the handler rate-limit callers without knowing where the counters live.
"""
from abc import ABC, abstractmethod
from typing import Optional


class IRateLimiter(ABC):
    """Per-key request admission."""

    @abstractmethod
    def admit(self, key: str) -> bool:
        """
        Count one request for key.

        Returns:
            False if the post-increment count exceeds the limit for the current window
        """
        pass

    @abstractmethod
    def reset(self, key: Optional[str] = None) -> None:
        """Forget the counter for key, or every counter when key is None."""
        pass
