"""Repository for GroupPermission and UserGroupPermission records."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.db.models.group_permission import GroupPermissionRow, UserGroupPermissionRow
from toolsmith.repositories.base import BaseRepository


class GroupPermissionRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, GroupPermissionRow)

    async def list_for_organization(self, organization_id: str) -> list[GroupPermissionRow]:
        stmt = (
            select(GroupPermissionRow)
            .where(GroupPermissionRow.organization_id == organization_id)
            .order_by(GroupPermissionRow.group)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_user(self, user_id: str, organization_id: str) -> list[GroupPermissionRow]:
        """Groups ``user_id`` belongs to within one organization."""
        stmt = (
            select(GroupPermissionRow)
            .join(
                UserGroupPermissionRow,
                UserGroupPermissionRow.group_permission_id == GroupPermissionRow.id,
            )
            .where(
                UserGroupPermissionRow.user_id == user_id,
                GroupPermissionRow.organization_id == organization_id,
            )
            .order_by(GroupPermissionRow.group)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class UserGroupPermissionRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, UserGroupPermissionRow)
