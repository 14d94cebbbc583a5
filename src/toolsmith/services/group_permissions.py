"""Grants users membership of permission groups."""

from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.db.models.group_permission import UserGroupPermissionRow
from toolsmith.repositories.group_permission_repo import UserGroupPermissionRepository
from toolsmith.services.id_generator import generate_id


class GroupPermissionsService:
    def __init__(self, session: AsyncSession):
        self.user_group_permissions = UserGroupPermissionRepository(session)

    async def create_user_group_permission(
        self, user_id: str, group_permission_id: str
    ) -> UserGroupPermissionRow:
        return await self.user_group_permissions.create(
            id=generate_id("ugp_"),
            user_id=user_id,
            group_permission_id=group_permission_id,
        )
