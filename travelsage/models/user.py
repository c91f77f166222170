"""User and session models"""
from datetime import datetime
from typing import Optional
from pydantic import Field

from .base import CamelModel
from ..utils.identifiers import new_id, utc_now


class User(CamelModel):
    """User as stored in the users collection"""
    id: str = Field(default_factory=new_id)
    username: str = Field(..., min_length=1, max_length=64)
    password_hash: str
    email: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    is_admin: bool = False
    # Per-user pointer to the itinerary being viewed/edited
    current_itinerary_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Session(CamelModel):
    """Server-side session keyed by the opaque cookie value"""
    id: str
    user_id: str
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) >= self.expires_at
