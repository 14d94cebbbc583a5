"""Group permission tables: per-organization capability bundles."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from toolsmith.db.base import Base, TimestampMixin


class GroupPermissionRow(Base, TimestampMixin):
    __tablename__ = "group_permissions"
    __table_args__ = (UniqueConstraint("organization_id", "group", name="uq_group_permissions_org_group"),)

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("organizations.id"), nullable=False, index=True
    )
    group: Mapped[str] = mapped_column(String(100), nullable=False)
    app_create: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    app_delete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    folder_create: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class UserGroupPermissionRow(Base, TimestampMixin):
    __tablename__ = "user_group_permissions"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), ForeignKey("users.id"), nullable=False, index=True)
    group_permission_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("group_permissions.id"), nullable=False, index=True
    )
