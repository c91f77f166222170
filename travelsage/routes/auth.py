"""Session lifecycle and profile endpoints"""
from fastapi import APIRouter, Depends, Request, Response, status

from ..container import Container
from ..middleware.auth import get_container, get_session_id, require_auth
from ..middleware.rate_limit import limit_login
from ..models import Session, User
from ..schemas.auth import (
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from ..schemas.response import ERROR_RESPONSES, MessageResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, container: Container, session: Session) -> None:
    """Deliver the session id in an HttpOnly cookie"""
    settings = container.settings
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.id,
        httponly=True,
        secure=settings.is_production,  # HTTPS only in production
        samesite="none" if settings.is_production else "lax",  # None for cross-site in production
        max_age=settings.session_ttl_minutes * 60,
    )


def clear_session_cookie(response: Response, container: Container) -> None:
    settings = container.settings
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


def to_user_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def register(
    body: RegisterRequest,
    response: Response,
    container: Container = Depends(get_container),
):
    """
    Register a new user and log them in

    The session id is set in an HttpOnly cookie.
    """
    user, session = await container.auth.register(
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    set_session_cookie(response, container, session)
    return to_user_response(user)


@router.post(
    "/login",
    response_model=UserResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(limit_login)],
)
async def login(
    body: LoginRequest,
    response: Response,
    container: Container = Depends(get_container),
):
    """Check credentials and start a session"""
    user, session = await container.auth.login(body.username, body.password)
    set_session_cookie(response, container, session)
    return to_user_response(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    container: Container = Depends(get_container),
):
    """End the session and clear the cookie; safe to call without a session"""
    await container.auth.logout(get_session_id(request))
    clear_session_cookie(response, container)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse, responses=ERROR_RESPONSES)
async def me(user: User = Depends(require_auth)):
    return to_user_response(user)


@router.patch("/me", response_model=UserResponse, responses=ERROR_RESPONSES)
async def update_me(
    body: ProfileUpdateRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """Update email and/or names; fields left out are unchanged"""
    updated = await container.auth.update_profile(
        user.id,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return to_user_response(updated)


@router.post("/password", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def change_password(
    body: PasswordChangeRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    await container.auth.change_password(user.id, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")
