"""Repository for Organization and SSOConfig records."""

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from toolsmith.db.models.organization import OrganizationRow, SSOConfigRow
from toolsmith.db.models.user import OrganizationUserRow
from toolsmith.models.enums import MembershipStatus, SSOKind
from toolsmith.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, OrganizationRow)

    async def get_with_sso_configs(self, organization_id: str) -> OrganizationRow | None:
        stmt = (
            select(OrganizationRow)
            .where(OrganizationRow.id == organization_id)
            .options(selectinload(OrganizationRow.sso_configs))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def first(self) -> OrganizationRow | None:
        stmt = select(OrganizationRow).order_by(OrganizationRow.created_at).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_active_member(
        self, user_id: str, form_login_only: bool = False
    ) -> list[OrganizationRow]:
        """Organizations where ``user_id`` is an active member, ordered by name."""
        stmt = select(OrganizationRow).join(
            OrganizationUserRow,
            and_(
                OrganizationUserRow.organization_id == OrganizationRow.id,
                OrganizationUserRow.status.in_([MembershipStatus.ACTIVE.value]),
            ),
        )
        if form_login_only:
            stmt = stmt.join(
                SSOConfigRow,
                and_(
                    SSOConfigRow.organization_id == OrganizationRow.id,
                    SSOConfigRow.sso == SSOKind.FORM.value,
                ),
            ).where(SSOConfigRow.enabled.is_(True))
        stmt = stmt.where(OrganizationUserRow.user_id == user_id).order_by(OrganizationRow.name.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def get_with_sso_kind(self, organization_id: str, sso: str) -> OrganizationRow | None:
        """Organization with ``sso_configs`` narrowed to one provider kind.

        Outer join: the organization is returned even when it has no config
        of that kind.
        """
        stmt = (
            select(OrganizationRow)
            .outerjoin(
                SSOConfigRow,
                and_(
                    SSOConfigRow.organization_id == OrganizationRow.id,
                    SSOConfigRow.sso == sso,
                ),
            )
            .options(contains_eager(OrganizationRow.sso_configs))
            .where(OrganizationRow.id == organization_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def get_with_sso_status(
        self, organization_id: str, status_list: list[bool]
    ) -> OrganizationRow | None:
        """Organization with ``sso_configs`` whose ``enabled`` is in ``status_list``.

        Inner join: an organization without any matching config is not found.
        """
        stmt = (
            select(OrganizationRow)
            .join(
                SSOConfigRow,
                and_(
                    SSOConfigRow.organization_id == OrganizationRow.id,
                    SSOConfigRow.enabled.in_(status_list),
                ),
            )
            .options(contains_eager(OrganizationRow.sso_configs))
            .where(OrganizationRow.id == organization_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.unique().scalar_one_or_none()


class SSOConfigRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, SSOConfigRow)

    async def get_enabled_with_organization(self, config_id: str) -> SSOConfigRow | None:
        stmt = (
            select(SSOConfigRow)
            .where(SSOConfigRow.id == config_id, SSOConfigRow.enabled.is_(True))
            .options(selectinload(SSOConfigRow.organization))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
