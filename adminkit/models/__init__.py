"""SQLAlchemy models and value types for the admin engine."""

from adminkit.models.role_type import RoleType
from adminkit.models.setting import Setting

__all__ = ["RoleType", "Setting"]
