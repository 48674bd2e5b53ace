"""
RoleClaim model: one typed claim attached to a role.

Permissions are stored as claims of type ``permission`` whose value is the
permission string (``Permissions.Roles.View``).
"""

from sqlalchemy import Column, ForeignKey, Index, String

from webapi.models.base import BaseModel


class RoleClaim(BaseModel):
    """A (role, claim type, claim value) triple."""

    __tablename__ = "role_claims"

    __table_args__ = (
        # Permission lookups filter on role and claim type together
        Index('idx_role_claim_role_type', 'role_id', 'claim_type'),
    )

    role_id = Column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    claim_type = Column(String(256), nullable=False)
    claim_value = Column(String(256), nullable=True)

    def __repr__(self):
        return f"<RoleClaim(role_id={self.role_id}, type='{self.claim_type}', value='{self.claim_value}')>"
