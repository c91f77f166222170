"""Rate limiter for API endpoints - in-memory sliding window"""
from datetime import datetime, timedelta
from collections import defaultdict
from typing import Dict, List

from .errors import RateLimitError


class InMemoryRateLimiter:
    """
    Per-client sliding-window limiter.

    State is per process; with several workers each one enforces its own window.
    """

    def __init__(self, requests_per_window: int = 20, window: timedelta = timedelta(minutes=1)):
        """
        Initialize rate limiter.

        Args:
            requests_per_window: Max requests allowed per client per window
            window: Length of the sliding window
        """
        self.requests_per_window = requests_per_window
        self.window = window
        self.requests: Dict[str, List[datetime]] = defaultdict(list)

    def _recent(self, client_key: str, now: datetime) -> List[datetime]:
        cutoff = now - self.window
        recent = [req_time for req_time in self.requests[client_key] if req_time > cutoff]
        self.requests[client_key] = recent
        return recent

    def is_allowed(self, client_key: str) -> bool:
        """
        Record a request and report whether it fits in the window

        Args:
            client_key: Client identifier (IP address)

        Returns:
            True if request is allowed, False if rate limit exceeded
        """
        now = datetime.now()
        recent = self._recent(client_key, now)
        if len(recent) >= self.requests_per_window:
            return False
        recent.append(now)
        return True

    def get_remaining(self, client_key: str) -> int:
        """Requests left for the client in the current window"""
        return max(0, self.requests_per_window - len(self._recent(client_key, datetime.now())))

    def check(self, client_key: str) -> None:
        """
        Raises:
            RateLimitError: If the client has used up its window
        """
        if not self.is_allowed(client_key):
            raise RateLimitError(
                "Too many requests, please try again later",
                {"limit": self.requests_per_window, "windowSeconds": int(self.window.total_seconds())}
            )

    def reset(self) -> None:
        self.requests.clear()
