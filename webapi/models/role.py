"""
Role model for claim-based RBAC.
"""

from sqlalchemy import Column, String, Text

from webapi.models.base import UUIDBaseModel
from webapi.models.mixins import TimestampMixin


def normalize_role_name(name: str) -> str:
    """Case-normalized form used for role name comparisons."""
    return name.upper() if name else name


class Role(UUIDBaseModel, TimestampMixin):
    """Role model for RBAC."""

    __tablename__ = "roles"

    name = Column(String(256), nullable=False)
    normalized_name = Column(String(256), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    def __init__(self, name: str = None, description: str = None, **kwargs):
        super().__init__(name=name, description=description, **kwargs)
        if self.normalized_name is None and name is not None:
            self.normalized_name = normalize_role_name(name)

    def rename(self, name: str) -> None:
        """Set the name and its normalized form together."""
        self.name = name
        self.normalized_name = normalize_role_name(name)

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.name}')>"
