"""
Audit mixin recording which user created and last modified a row.
"""

from typing import Optional

from sqlalchemy import Column, String
from sqlalchemy.orm import declared_attr


class AuditMixin:
    """Mixin for created_by / updated_by user ids."""

    @declared_attr
    def created_by(cls):
        return Column(String(36), nullable=True)

    @declared_attr
    def updated_by(cls):
        return Column(String(36), nullable=True)

    def mark_created(self, user_id: Optional[str]) -> None:
        self.created_by = user_id
        self.updated_by = user_id

    def mark_updated(self, user_id: Optional[str]) -> None:
        self.updated_by = user_id
