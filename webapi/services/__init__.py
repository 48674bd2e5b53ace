"""
Application services, one method per API operation.
"""

from .brand_service import BrandService, search_brands
from .role_service import RoleService

__all__ = ["BrandService", "RoleService", "search_brands"]
