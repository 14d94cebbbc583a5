"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from toolsmith.db.models.organization import OrganizationRow, SSOConfigRow
from toolsmith.db.models.user import OrganizationUserRow, UserRow
from toolsmith.db.models.group_permission import GroupPermissionRow, UserGroupPermissionRow

__all__ = [
    "OrganizationRow",
    "SSOConfigRow",
    "UserRow",
    "OrganizationUserRow",
    "GroupPermissionRow",
    "UserGroupPermissionRow",
]
