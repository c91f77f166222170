"""Auth Gate: registration, credential checks and session-to-user resolution"""
import logging
from datetime import timedelta
from typing import List, Optional, Tuple

from ..models import Session, User
from ..repositories import SessionRepository, UserRepository
from ..utils.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..utils.identifiers import new_session_token, utc_now
from ..utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthGate:
    """Owns users and sessions; every other store only sees user ids"""

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        session_ttl: timedelta = timedelta(hours=24),
        min_password_length: int = 8,
    ):
        self.users = users
        self.sessions = sessions
        self.session_ttl = session_ttl
        self.min_password_length = min_password_length

    def _check_password_strength(self, password: Optional[str], field: str = "password") -> None:
        if not password or len(password) < self.min_password_length:
            raise ValidationError.for_fields(
                "Password is too short",
                [{
                    "field": field,
                    "message": f"Password must be at least {self.min_password_length} characters long",
                }],
            )

    async def _open_session(self, user: User) -> Session:
        now = utc_now()
        session = Session(
            id=new_session_token(),
            user_id=user.id,
            created_at=now,
            expires_at=now + self.session_ttl,
        )
        return await self.sessions.add(session)

    async def register(
        self,
        username: str,
        password: str,
        email: Optional[str] = None,
        first_name: str = "",
        last_name: str = "",
    ) -> Tuple[User, Session]:
        """
        Create an account and log it in

        Returns:
            The new user and its session

        Raises:
            ValidationError: If username is blank or the password too short
            ConflictError: If the username or email is already taken
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError.missing("username")
        self._check_password_strength(password)

        if await self.users.get_by_username(username):
            raise ConflictError("Username already taken")
        if email and await self.users.get_by_email(email):
            raise ConflictError("Email already registered")

        user = await self.users.add(User(
            username=username,
            password_hash=hash_password(password),
            email=email or None,
            first_name=first_name or "",
            last_name=last_name or "",
        ))
        logger.info("Registered user %s", user.id)
        return user, await self._open_session(user)

    async def login(self, username: str, password: str) -> Tuple[User, Session]:
        """
        Check credentials and open a session

        Raises:
            ValidationError: If username or password is missing
            AuthenticationError: If the credentials do not match
        """
        missing = [name for name, value in (("username", username), ("password", password)) if not value]
        if missing:
            raise ValidationError.missing(*missing)

        user = await self.users.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        logger.info("User %s logged in", user.id)
        return user, await self._open_session(user)

    async def logout(self, session_id: Optional[str]) -> None:
        """Drop the session; unknown or missing ids are ignored"""
        if session_id:
            await self.sessions.delete(session_id)
            logger.info("Session closed")

    async def resolve_session(self, session_id: Optional[str]) -> User:
        """
        Map a session id to its user

        Raises:
            AuthenticationError: If the session is missing, unknown, expired,
                or points at a user that no longer exists
        """
        if not session_id:
            raise AuthenticationError("Authentication required")

        session = await self.sessions.get(session_id)
        if session is None:
            raise AuthenticationError("Invalid session")
        if session.is_expired():
            await self.sessions.delete(session_id)
            raise AuthenticationError("Session expired")

        user = await self.users.get(session.user_id)
        if user is None:
            await self.sessions.delete(session_id)
            raise AuthenticationError("Invalid session")
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(
        self,
        user_id: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """Update the given profile fields; ``None`` leaves a field untouched"""
        user = await self.get_user(user_id)

        if email is not None and email != user.email:
            existing = await self.users.get_by_email(email)
            if existing and existing.id != user.id:
                raise ConflictError("Email already registered")
            user.email = email
        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name

        user.updated_at = utc_now()
        return await self.users.save(user)

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> User:
        """
        Raises:
            AuthenticationError: If ``current_password`` is wrong
            ValidationError: If ``new_password`` is too short
        """
        user = await self.get_user(user_id)
        if not verify_password(current_password or "", user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        self._check_password_strength(new_password, field="newPassword")

        user.password_hash = hash_password(new_password)
        user.updated_at = utc_now()
        logger.info("Password changed for user %s", user.id)
        return await self.users.save(user)

    async def list_users(self) -> List[User]:
        return await self.users.list_all()

    @staticmethod
    def require_admin(user: User) -> User:
        if not user.is_admin:
            raise AuthorizationError("Admin access required")
        return user

    @staticmethod
    def ensure_owner(user: User, owner_id: str, resource: str = "resource") -> None:
        """
        Ownership check applied at the HTTP boundary

        Admins pass; anyone else must own the resource.

        Raises:
            AuthorizationError: If ``user`` neither owns the resource nor is an admin
        """
        if user.id != owner_id and not user.is_admin:
            raise AuthorizationError(
                "Access denied",
                {"resource": resource}
            )
