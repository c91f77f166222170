"""Session resolution dependencies for protected routes"""
from typing import Optional

from fastapi import Depends, Request

from ..container import Container
from ..models import User
from ..services import AuthGate
from ..utils.errors import AuthenticationError


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_session_id(request: Request) -> Optional[str]:
    """
    Session id from the session cookie, or from ``Authorization: Bearer``
    for non-browser clients
    """
    container = get_container(request)
    session_id = request.cookies.get(container.settings.session_cookie_name)
    if not session_id:
        auth_header = request.headers.get("authorization")
        if auth_header and auth_header.startswith("Bearer "):
            session_id = auth_header.split(" ", 1)[1].strip()
    return session_id or None


async def get_current_user(request: Request) -> User:
    """
    Dependency to get the current authenticated user

    Raises:
        AuthenticationError: If the session is missing, invalid or expired
    """
    container = get_container(request)
    return await container.auth.resolve_session(get_session_id(request))


async def optional_user(request: Request) -> Optional[User]:
    """Current user, or None for anonymous callers and stale sessions"""
    if not get_session_id(request):
        return None
    try:
        return await get_current_user(request)
    except AuthenticationError:
        return None


def require_auth(user: User = Depends(get_current_user)) -> User:
    """
    Dependency shorthand for requiring authentication

    Args:
        user: Current user from get_current_user dependency

    Returns:
        Current user
    """
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """
    Raises:
        AuthorizationError: If the user is not an admin
    """
    return AuthGate.require_admin(user)
