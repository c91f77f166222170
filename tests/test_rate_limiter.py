from datetime import timedelta

import pytest

from travelsage.utils.errors import RateLimitError
from travelsage.utils.rate_limiter import InMemoryRateLimiter


def test_window_is_per_client():
    limiter = InMemoryRateLimiter(requests_per_window=2)

    assert limiter.is_allowed("a")
    assert limiter.get_remaining("a") == 1
    assert limiter.is_allowed("a")
    assert not limiter.is_allowed("a")
    assert limiter.get_remaining("a") == 0

    assert limiter.get_remaining("b") == 2
    assert limiter.is_allowed("b")


def test_check_raises_with_limit_details():
    limiter = InMemoryRateLimiter(requests_per_window=1, window=timedelta(seconds=30))
    limiter.check("a")

    with pytest.raises(RateLimitError) as exc:
        limiter.check("a")
    assert exc.value.status_code == 429
    assert exc.value.details == {"limit": 1, "windowSeconds": 30}


def test_expired_requests_leave_the_window():
    limiter = InMemoryRateLimiter(requests_per_window=1, window=timedelta(seconds=0))
    assert limiter.is_allowed("a")
    assert limiter.is_allowed("a")


def test_reset_clears_every_client():
    limiter = InMemoryRateLimiter(requests_per_window=1)
    limiter.is_allowed("a")
    limiter.is_allowed("b")

    limiter.reset()
    assert limiter.get_remaining("a") == 1
    assert limiter.get_remaining("b") == 1
