"""Authentication schemas for requests and responses"""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from ..models.base import CamelModel

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_LENGTH = 72


class RegisterRequest(CamelModel):
    """User registration request schema"""
    username: str = Field(..., min_length=1, max_length=64, description="Unique username")
    password: str = Field(..., max_length=MAX_PASSWORD_LENGTH, description="Password (min 8 characters)")
    email: Optional[EmailStr] = Field(None, description="Unique email address")
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)


class LoginRequest(CamelModel):
    """User login request schema"""
    username: str = Field(..., description="Username")
    password: str = Field(..., max_length=MAX_PASSWORD_LENGTH, description="Password")


class ProfileUpdateRequest(CamelModel):
    """Fields left out are not changed"""
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class PasswordChangeRequest(CamelModel):
    current_password: str = Field(..., max_length=MAX_PASSWORD_LENGTH)
    new_password: str = Field(..., max_length=MAX_PASSWORD_LENGTH)


class UserResponse(CamelModel):
    """User data response schema (never includes password material)"""
    id: str
    username: str
    email: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    is_admin: bool = False
    current_itinerary_id: Optional[str] = None
    created_at: datetime
