"""
User model for authorization.

Users are identified by username, which is also the `sub` claim of their
bearer token. is_admin grants access to every admin-only route.
"""

from sqlalchemy import Column, String, Boolean
from app.core.database import Base


class User(Base):
    """Job board user account."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)

    # Admin role for protected endpoints
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
