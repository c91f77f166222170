"""Rate limiting dependencies for the assistant and login endpoints"""
from fastapi import Request

from .auth import get_container


def client_key(request: Request) -> str:
    """Client identifier used as the rate-limit bucket"""
    return request.client.host if request.client else "unknown"


def limit_assistant(request: Request) -> None:
    """
    Raises:
        RateLimitError: If the client exceeded ASSISTANT_REQUESTS_PER_MINUTE
    """
    get_container(request).assistant_limiter.check(client_key(request))


def limit_login(request: Request) -> None:
    """
    Raises:
        RateLimitError: If the client exceeded LOGIN_ATTEMPTS_PER_MINUTE
    """
    get_container(request).login_limiter.check(client_key(request))
