"""
Pydantic schemas for users and the authenticated caller.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import List

from app.schemas.base import CamelModel, RequestModel


class AuthUser(BaseModel):
    """Caller identity taken from a verified bearer token."""
    username: str
    is_admin: bool = False


class UserCreateRequest(RequestModel):
    """Schema for creating a user (admin only)"""
    username: str = Field(..., min_length=1, max_length=25)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    is_admin: bool = False


class UserUpdateRequest(RequestModel):
    """
    Schema for a partial user update.

    The username cannot be changed; only admins may change isAdmin.
    """
    first_name: str = Field(None, min_length=1)
    last_name: str = Field(None, min_length=1)
    email: EmailStr = None
    is_admin: bool = None


class UserResponse(CamelModel):
    """User profile response"""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserEnvelope(CamelModel):
    user: UserResponse


class UserListResponse(CamelModel):
    users: List[UserResponse]


class UserDeleteResponse(CamelModel):
    deleted: str
