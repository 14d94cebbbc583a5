"""User lookup, creation and group membership checks."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.db.models.user import UserRow
from toolsmith.repositories.group_permission_repo import GroupPermissionRepository
from toolsmith.repositories.user_repo import UserRepository
from toolsmith.services.id_generator import generate_id
from toolsmith.services.security import hash_password

logger = logging.getLogger(__name__)


class UsersService:
    def __init__(self, session: AsyncSession):
        self.users = UserRepository(session)
        self.group_permissions = GroupPermissionRepository(session)

    async def find_one(self, user_id: str) -> UserRow | None:
        return await self.users.get(user_id)

    async def find_by_email(self, email: str) -> UserRow | None:
        return await self.users.get_by_email(email)

    async def find_by_forgot_password_token(self, token: str) -> UserRow | None:
        return await self.users.get_by_forgot_password_token(token)

    async def create(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        password: str | None = None,
        default_organization_id: str | None = None,
    ) -> UserRow:
        user = await self.users.create(
            id=generate_id("usr_"),
            email=email.lower(),
            first_name=first_name,
            last_name=last_name,
            password_digest=hash_password(password) if password else None,
            default_organization_id=default_organization_id,
        )
        logger.info("Created user %s", user.id)
        return user

    async def update_password(self, user: UserRow, password: str) -> UserRow:
        return await self.users.update(
            user,
            password_digest=hash_password(password),
            forgot_password_token=None,
        )

    async def set_forgot_password_token(self, user: UserRow, token: str) -> UserRow:
        return await self.users.update(user, forgot_password_token=token)

    async def group_names(self, user, organization_id: str | None = None) -> list[str]:
        org_id = organization_id or user.organization_id
        if not org_id:
            return []
        groups = await self.group_permissions.list_for_user(user.id, org_id)
        return [g.group for g in groups]

    async def has_group(self, user, group: str, organization_id: str | None = None) -> bool:
        """True when ``user`` belongs to ``group`` in the given (or current) organization."""
        return group in await self.group_names(user, organization_id)
