"""
Model mixins for SQLAlchemy models.
"""

from .timestamp_mixin import TimestampMixin
from .soft_delete_mixin import SoftDeleteMixin
from .audit_mixin import AuditMixin

__all__ = ["TimestampMixin", "SoftDeleteMixin", "AuditMixin"]
