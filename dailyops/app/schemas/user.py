"""
User Pydantic schemas.

Defines request and response schemas for user management and login.
"""

from pydantic import Field
from typing import Optional
from dailyops.app.models.base import CamelModel
from dailyops.app.models.enums import UserRole
from dailyops.app.models.user import User


class UserCreate(CamelModel):
    """
    Schema for creating a user.

    Used by POST /api/users. ``id`` and ``createdAt`` are stamped by the server.
    """
    username: str = Field(..., min_length=1, max_length=100, description="Unique username")
    password: str = Field(..., min_length=1, description="Password (stored as plain text)")
    role: UserRole = Field(default=UserRole.MANAGER, description="User role (defaults to manager)")
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=255)


class UserUpdate(CamelModel):
    """Schema for updating a user. Only provided fields are changed."""
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[str] = Field(None, min_length=1, max_length=255)


class LoginRequest(CamelModel):
    """Schema for POST /api/login."""
    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class LoginResponse(CamelModel):
    """The authenticated user and its session token."""
    user: User
    token: str
