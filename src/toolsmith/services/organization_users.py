"""Membership rows linking users to organizations."""

from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.db.models.organization import OrganizationRow
from toolsmith.db.models.user import OrganizationUserRow
from toolsmith.models.enums import DefaultGroup, MembershipStatus
from toolsmith.repositories.user_repo import OrganizationUserRepository
from toolsmith.services.id_generator import generate_id, generate_token


class OrganizationUsersService:
    def __init__(self, session: AsyncSession):
        self.organization_users = OrganizationUserRepository(session)

    async def create(
        self, user, organization: OrganizationRow, is_invite: bool = False
    ) -> OrganizationUserRow:
        """Add ``user`` to ``organization``; invited members get an invitation token."""
        return await self.organization_users.create(
            id=generate_id("ou_"),
            user_id=user.id,
            organization_id=organization.id,
            role=DefaultGroup.ALL_USERS.value,
            status=(MembershipStatus.INVITED if is_invite else MembershipStatus.ACTIVE).value,
            invitation_token=generate_token() if is_invite else None,
        )

    async def find_active(self, user_id: str, organization_id: str) -> OrganizationUserRow | None:
        membership = await self.organization_users.get_membership(user_id, organization_id)
        if membership and membership.status == MembershipStatus.ACTIVE:
            return membership
        return None
