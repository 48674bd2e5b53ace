"""
Base SQLAlchemy models with common fields and utilities.
"""

import uuid

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declared_attr

from webapi.core.database import Base


def generate_uuid() -> str:
    """Generate a string primary key."""
    return str(uuid.uuid4())


class BaseModel(Base):
    """Base model with an integer primary key."""

    __abstract__ = True

    @declared_attr
    def id(cls):
        return Column(Integer, primary_key=True, index=True)


class UUIDBaseModel(Base):
    """Base model with a string (UUID) primary key, generated on insert."""

    __abstract__ = True

    @declared_attr
    def id(cls):
        return Column(String(36), primary_key=True, index=True, default=generate_uuid)
