"""
User model for the identity store.
"""

from sqlalchemy import Boolean, Column, Index, String

from webapi.models.base import UUIDBaseModel
from webapi.models.mixins import TimestampMixin


class User(UUIDBaseModel, TimestampMixin):
    """Application user. Credentials live with the identity provider."""

    __tablename__ = "users"

    __table_args__ = (
        # Index for filtering active users
        Index('idx_user_is_active', 'is_active'),
    )

    username = Column(String(256), unique=True, index=True, nullable=False)
    email = Column(String(256), unique=True, index=True, nullable=False)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', email='{self.email}')>"
