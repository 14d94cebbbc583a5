"""OrganizationsService: workspaces, their default permission groups and SSO configs."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.config import Settings, settings as default_settings
from toolsmith.db.models.group_permission import GroupPermissionRow
from toolsmith.db.models.organization import OrganizationRow, SSOConfigRow
from toolsmith.errors.exceptions import NotFoundError, ValidationError
from toolsmith.models.enums import DefaultGroup, SSOKind
from toolsmith.models.organization import OrganizationUpdate, SSOConfigUpdate
from toolsmith.models.sso import normalize_settings, redact, sso_config_adapter
from toolsmith.repositories.group_permission_repo import GroupPermissionRepository
from toolsmith.repositories.organization_repo import OrganizationRepository, SSOConfigRepository
from toolsmith.repositories.user_repo import OrganizationUserRepository
from toolsmith.services.group_permissions import GroupPermissionsService
from toolsmith.services.id_generator import generate_id
from toolsmith.services.organization_users import OrganizationUsersService
from toolsmith.services.users import UsersService

logger = logging.getLogger(__name__)

DEFAULT_GROUPS = (DefaultGroup.ALL_USERS, DefaultGroup.ADMIN)
SSO_KINDS = {k.value for k in SSOKind}


class OrganizationsService:
    """Create and manage organizations.

    Collaborators are built from the request's session; nothing here commits,
    callers own the transaction boundary.
    """

    def __init__(self, session: AsyncSession, app_settings: Settings | None = None):
        self.session = session
        self.settings = app_settings or default_settings
        self.organizations = OrganizationRepository(session)
        self.sso_configs = SSOConfigRepository(session)
        self.organization_users = OrganizationUserRepository(session)
        self.group_permissions = GroupPermissionRepository(session)
        self.users_service = UsersService(session)
        self.organization_users_service = OrganizationUsersService(session)
        self.group_permissions_service = GroupPermissionsService(session)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create(self, name: str, user=None) -> OrganizationRow:
        """Create an organization with form login and the two default groups.

        When ``user`` is given they become an active member of every
        created group.
        """
        organization = OrganizationRow(
            id=generate_id("org_"),
            name=name,
            sso_configs=[
                SSOConfigRow(
                    id=generate_id("sso_"),
                    sso=SSOKind.FORM.value,
                    enabled=not self.settings.disable_password_login,
                    configs={},
                )
            ],
        )
        self.session.add(organization)
        await self.session.flush()

        created_groups = await self.create_default_group_permissions(organization)

        if user is not None:
            await self.organization_users_service.create(user, organization, is_invite=False)
            for group_permission in created_groups:
                await self.group_permissions_service.create_user_group_permission(
                    user.id, group_permission.id
                )

        logger.info("Created organization %s (%s)", organization.id, name)
        return organization

    async def create_default_group_permissions(
        self, organization: OrganizationRow
    ) -> list[GroupPermissionRow]:
        created = []
        for group in DEFAULT_GROUPS:
            is_admin = group == DefaultGroup.ADMIN
            row = await self.group_permissions.create(
                id=generate_id("grp_"),
                organization_id=organization.id,
                group=group.value,
                app_create=is_admin,
                app_delete=is_admin,
                folder_create=is_admin,
            )
            created.append(row)
        return created

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, organization_id: str) -> OrganizationRow | None:
        return await self.organizations.get_with_sso_configs(organization_id)

    async def get_single_organization(self) -> OrganizationRow | None:
        return await self.organizations.first()

    async def fetch_users(self, user) -> list[dict]:
        """Serialize every member of the caller's organization.

        Invitation tokens are only included for callers in the ``admin`` group.
        """
        memberships = await self.organization_users.list_with_users(user.organization_id)
        is_admin = await self.users_service.has_group(user, DefaultGroup.ADMIN.value)

        serialized = []
        for membership in memberships:
            member = membership.user
            entry = {
                "email": member.email,
                "first_name": member.first_name,
                "last_name": member.last_name,
                "name": f"{member.first_name or ''} {member.last_name or ''}".strip(),
                "id": membership.id,
                "role": membership.role,
                "status": membership.status,
            }
            if is_admin and membership.invitation_token:
                entry["invitation_token"] = membership.invitation_token
            serialized.append(entry)
        return serialized

    async def fetch_organizations(self, user) -> list[OrganizationRow]:
        return await self.organizations.list_for_active_member(user.id)

    async def find_organizations_supporting_form_login(self, user) -> list[OrganizationRow]:
        return await self.organizations.list_for_active_member(user.id, form_login_only=True)

    async def get_sso_configs(self, organization_id: str, sso: str) -> OrganizationRow | None:
        return await self.organizations.get_with_sso_kind(organization_id, sso)

    async def fetch_organization_details(
        self,
        organization_id: str,
        status_list: list[bool] | None = None,
        hide_sensitive_data: bool = False,
    ) -> OrganizationRow | dict | None:
        """Organization with SSO configs filtered by enabled status.

        With ``hide_sensitive_data`` the result is a mapping of provider kind
        to the config without secrets, ids or timestamps.
        """
        organization = await self.organizations.get_with_sso_status(
            organization_id,
            status_list if status_list is not None else [True, False],
        )
        if not hide_sensitive_data:
            return organization
        return self._hide_sso_sensitive_data(organization.sso_configs if organization else [])

    @staticmethod
    def _hide_sso_sensitive_data(sso_configs: list[SSOConfigRow]) -> dict:
        configs: dict[str, dict] = {}
        for row in sso_configs:
            if row.sso not in SSO_KINDS:
                logger.warning("Skipping unrecognized SSO config kind %r (%s)", row.sso, row.id)
                continue
            try:
                view = sso_config_adapter.validate_python(
                    {"sso": row.sso, "enabled": row.enabled, "configs": row.configs or {}}
                )
            except PydanticValidationError:
                logger.warning("Skipping malformed %s SSO config %s", row.sso, row.id)
                continue
            configs[view.sso] = redact(view)
        return configs

    async def get_configs(self, config_id: str) -> SSOConfigRow | None:
        return await self.sso_configs.get_enabled_with_organization(config_id)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    async def update_organization(
        self, organization_id: str, params: OrganizationUpdate
    ) -> OrganizationRow:
        organization = await self.organizations.get(organization_id)
        if organization is None:
            raise NotFoundError("Organization", organization_id)
        updates = params.model_dump(exclude_unset=True, exclude_none=True)
        if updates:
            await self.organizations.update(organization, **updates)
        return organization

    async def update_organization_configs(
        self, organization_id: str, params: SSOConfigUpdate
    ) -> SSOConfigRow:
        """Upsert the organization's SSO config for ``params.type``."""
        kind = params.type
        if not kind or kind not in SSO_KINDS:
            raise ValidationError(f"Unsupported SSO type: {kind!r}")

        organization = await self.get_sso_configs(organization_id, kind)
        if organization is None:
            raise NotFoundError("Organization", organization_id)

        updates = params.model_dump(
            include={"configs", "enabled"}, exclude_unset=True, exclude_none=True
        )
        if "configs" in updates:
            try:
                updates["configs"] = normalize_settings(kind, updates["configs"])
            except PydanticValidationError as exc:
                raise ValidationError(
                    f"Invalid configs for SSO type {kind!r}",
                    details=exc.errors(include_url=False, include_context=False),
                ) from exc

        if organization.sso_configs:
            sso_config = organization.sso_configs[0]
            if updates:
                await self.sso_configs.update(sso_config, **updates)
            return sso_config

        return await self.sso_configs.create(
            id=generate_id("sso_"),
            organization_id=organization.id,
            sso=kind,
            configs=updates.get("configs") or {},
            enabled=bool(updates.get("enabled")),
        )
