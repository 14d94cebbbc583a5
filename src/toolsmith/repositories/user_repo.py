"""Repository for User and OrganizationUser records."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from toolsmith.db.models.user import OrganizationUserRow, UserRow
from toolsmith.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, UserRow)

    async def get_by_email(self, email: str) -> UserRow | None:
        stmt = select(UserRow).where(UserRow.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_forgot_password_token(self, token: str) -> UserRow | None:
        stmt = select(UserRow).where(UserRow.forgot_password_token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class OrganizationUserRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, OrganizationUserRow)

    async def list_with_users(self, organization_id: str) -> list[OrganizationUserRow]:
        stmt = (
            select(OrganizationUserRow)
            .where(OrganizationUserRow.organization_id == organization_id)
            .options(selectinload(OrganizationUserRow.user))
            .order_by(OrganizationUserRow.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_membership(self, user_id: str, organization_id: str) -> OrganizationUserRow | None:
        stmt = select(OrganizationUserRow).where(
            OrganizationUserRow.user_id == user_id,
            OrganizationUserRow.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
