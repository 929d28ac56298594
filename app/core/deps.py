"""
FastAPI dependencies for authentication and authorization.

get_current_user never fails: a missing or invalid token just means an
anonymous request. The ensure_* dependencies layer role checks on top of it
and raise UnauthorizedError (401) or ForbiddenError (403).
"""

import logging
from typing import Callable, Optional, Type

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError

from app.core.exceptions import BadRequestError, ForbiddenError, UnauthorizedError, validation_messages
from app.core.security import decode_token
from app.schemas.base import RequestModel
from app.schemas.user import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>), optional
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthUser]:
    """
    Extract the user from the JWT token if one was provided.

    Returns None for anonymous requests, including requests carrying a token
    that fails verification.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.debug(f"Ignoring invalid bearer token: {e}")
        return None

    username = payload.get("sub")
    if username is None:
        return None

    return AuthUser(username=username, is_admin=bool(payload.get("is_admin", False)))


async def ensure_logged_in(
    user: Optional[AuthUser] = Depends(get_current_user),
) -> AuthUser:
    """
    Raises:
        UnauthorizedError: If the request is anonymous
    """
    if user is None:
        raise UnauthorizedError()
    return user


async def ensure_admin(user: AuthUser = Depends(ensure_logged_in)) -> AuthUser:
    """
    Raises:
        UnauthorizedError: If the request is anonymous
        ForbiddenError: If the user is not an admin
    """
    if not user.is_admin:
        raise ForbiddenError()
    return user


async def ensure_admin_or_self(
    username: str,
    user: AuthUser = Depends(ensure_logged_in),
) -> AuthUser:
    """
    For routes keyed by {username}: admins may act on any user, everyone
    else only on themselves.

    Raises:
        UnauthorizedError: If the request is anonymous
        ForbiddenError: If the user is neither an admin nor `username`
    """
    if not (user.is_admin or user.username == username):
        raise ForbiddenError()
    return user


def query_filters(model: Type[RequestModel]) -> Callable[[Request], RequestModel]:
    """
    Dependency factory validating the whole query string against `model`.

    Unknown keys and bad values become a 400 with one message per problem.
    """
    def dependency(request: Request) -> RequestModel:
        try:
            return model.model_validate(dict(request.query_params))
        except ValidationError as e:
            raise BadRequestError(validation_messages(e.errors()))

    return dependency
