"""
Audit Log model for tracking role, permission and catalog changes.
"""

import json

from sqlalchemy import Boolean, Column, Index, String, Text

from webapi.models.base import BaseModel
from webapi.models.mixins import TimestampMixin


class AuditLog(BaseModel, TimestampMixin):
    """Audit trail entry."""

    __tablename__ = "audit_logs"

    user_id = Column(String(36), nullable=True, index=True)  # Nullable for system events
    action = Column(String(100), nullable=False, index=True)  # role_create, permissions_update, ...
    resource = Column(String(255), nullable=True, index=True)  # role, brand
    resource_id = Column(String(255), nullable=True)
    details = Column(Text, nullable=True)  # JSON details
    success = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        # Composite index for user activity history
        Index('idx_audit_log_user_created', 'user_id', 'created_at'),
        # Composite index for resource change tracking
        Index('idx_audit_log_resource_created', 'resource', 'created_at'),
    )

    def __repr__(self):
        return f"<AuditLog(user_id={self.user_id}, action='{self.action}', resource='{self.resource}')>"

    @classmethod
    def log_event(cls, db_session, user_id=None, action=None, resource=None, resource_id=None,
                  details=None, success=True):
        """Create an audit log entry; the caller's commit persists it."""
        audit_log = cls(
            user_id=user_id,
            action=action,
            resource=resource,
            resource_id=resource_id,
            success=success
        )

        if details:
            if isinstance(details, dict):
                audit_log.details = json.dumps(details)
            else:
                audit_log.details = str(details)

        db_session.add(audit_log)
        return audit_log

    @classmethod
    def log_role_change(cls, db_session, user_id, action, role_id, role_name):
        """Log role creation, update or deletion."""
        return cls.log_event(
            db_session=db_session,
            user_id=user_id,
            action=action,
            resource="role",
            resource_id=str(role_id),
            details={"event_type": "authorization", "role_name": role_name}
        )

    @classmethod
    def log_permissions_update(cls, db_session, user_id, role_id, role_name, added, removed):
        """Log a permission synchronisation on a role."""
        return cls.log_event(
            db_session=db_session,
            user_id=user_id,
            action="permissions_update",
            resource="role",
            resource_id=str(role_id),
            details={
                "event_type": "authorization",
                "role_name": role_name,
                "added": sorted(added),
                "removed": sorted(removed),
            }
        )

    @classmethod
    def log_brand_change(cls, db_session, user_id, action, brand_id, brand_name):
        """Log brand creation, update or deletion."""
        return cls.log_event(
            db_session=db_session,
            user_id=user_id,
            action=action,
            resource="brand",
            resource_id=str(brand_id),
            details={"event_type": "catalog", "brand_name": brand_name}
        )

    def get_details(self):
        """Get audit log details as a dictionary."""
        if not self.details:
            return {}
        try:
            return json.loads(self.details)
        except (json.JSONDecodeError, TypeError):
            return {"raw_details": self.details}

    def to_dict(self):
        """Convert audit log to dictionary for API responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "action": self.action,
            "resource": self.resource,
            "resource_id": self.resource_id,
            "success": self.success,
            "details": self.get_details(),
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
