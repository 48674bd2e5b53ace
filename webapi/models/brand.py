"""
Brand model for the product catalog.
"""

from sqlalchemy import Column, Index, String, Text

from webapi.models.base import UUIDBaseModel
from webapi.models.mixins import AuditMixin, SoftDeleteMixin, TimestampMixin


class Brand(UUIDBaseModel, TimestampMixin, AuditMixin, SoftDeleteMixin):
    """Catalog brand."""

    __tablename__ = "brands"

    # Columns matched by free-text keyword search
    __searchable__ = ("name", "description")

    __table_args__ = (
        # Default ordering of searches is by name over live rows
        Index('idx_brand_deleted_name', 'is_deleted', 'name'),
    )

    name = Column(String(256), nullable=False, index=True)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Brand(id={self.id}, name='{self.name}')>"
