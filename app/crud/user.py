"""
CRUD operations for User model.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import named, param_name, sql_for_partial_update
from app.models.user import User
from app.schemas.user import UserCreateRequest

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def create(db: Session, user_data: UserCreateRequest) -> User:
    """
    Create a new user.

    Raises:
        BadRequestError: If the username is taken
    """
    duplicate = db.query(User).filter(User.username == user_data.username).first()
    if duplicate:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    db_user = User(
        username=user_data.username,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=user_data.is_admin,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    logger.info(f"Created user {db_user.username} (admin: {db_user.is_admin})")
    return db_user


def find_all(db: Session) -> List[User]:
    """Retrieve all users ordered by username."""
    return db.query(User).order_by(User.username).all()


def get(db: Session, username: str) -> User:
    """
    Raises:
        NotFoundError: If the user does not exist
    """
    user = db.query(User).filter(User.username == username).first()
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user.

    Data can include firstName, lastName, email and isAdmin.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If the user does not exist
    """
    set_clause = sql_for_partial_update(data, JS_TO_SQL)
    username_idx = set_clause.next_index

    query_sql = f"""
        UPDATE users
        SET {set_clause.render(named)}
        WHERE username = {named(username_idx)}
        RETURNING username, first_name, last_name, email, is_admin"""

    params = set_clause.params()
    params[param_name(username_idx)] = username

    row = db.execute(text(query_sql), params).mappings().first()
    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    user = dict(row)
    db.commit()

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If the user does not exist
    """
    user = get(db, username)
    db.delete(user)
    db.commit()

    logger.info(f"Deleted user {username}")
