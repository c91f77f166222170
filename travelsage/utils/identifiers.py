"""Id, token and timestamp helpers"""
import secrets
import string
import uuid
from datetime import datetime, timezone

CONFIRMATION_CODE_LENGTH = 8
_CONFIRMATION_ALPHABET = string.ascii_uppercase + string.digits


def new_id() -> str:
    """Opaque entity id (hex uuid4)"""
    return uuid.uuid4().hex


def new_session_token() -> str:
    """Unguessable session id for the session cookie"""
    return secrets.token_urlsafe(32)


def new_confirmation_code(length: int = CONFIRMATION_CODE_LENGTH) -> str:
    """Short uppercase alphanumeric booking reference, e.g. ``K7Q2ZP4M``"""
    return "".join(secrets.choice(_CONFIRMATION_ALPHABET) for _ in range(length))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
