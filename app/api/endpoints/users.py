"""
User endpoints.

Listing and creating users is admin only. Reading, updating and deleting a
single user is allowed to admins and to that user.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_admin_or_self
from app.core.exceptions import ForbiddenError
from app.crud import user as user_crud
from app.schemas.user import (
    AuthUser,
    UserCreateRequest,
    UserDeleteResponse,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserEnvelope)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """Create a user, optionally an admin."""
    user = user_crud.create(db, request)
    return {"user": UserResponse.model_validate(user)}


@router.get("/", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """List all users."""
    users = user_crud.find_all(db)
    return {"users": [UserResponse.model_validate(u) for u in users]}


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(ensure_admin_or_self)
):
    user = user_crud.get(db, username)
    return {"user": UserResponse.model_validate(user)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(ensure_admin_or_self)
):
    """
    Partially update a user.

    Fields can be: firstName, lastName, email, isAdmin (admins only)
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    if "isAdmin" in data and not current_user.is_admin:
        raise ForbiddenError("Only admins can change isAdmin")

    user = user_crud.update(db, username, data)
    return {"user": UserResponse.model_validate(user)}


@router.delete("/{username}", response_model=UserDeleteResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(ensure_admin_or_self)
):
    user_crud.remove(db, username)
    logger.info(f"{current_user.username} deleted user {username}")
    return {"deleted": username}
