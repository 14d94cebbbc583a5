"""AuthService: password login, organization switching, sign-up and password resets."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.config import Settings, settings as default_settings
from toolsmith.db.models.organization import OrganizationRow
from toolsmith.db.models.user import UserRow
from toolsmith.errors.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)
from toolsmith.models.enums import DefaultGroup, SSOKind
from toolsmith.models.user import AuthResponse, SessionUser
from toolsmith.repositories.group_permission_repo import GroupPermissionRepository
from toolsmith.services.group_permissions import GroupPermissionsService
from toolsmith.services.id_generator import generate_token
from toolsmith.services.organization_users import OrganizationUsersService
from toolsmith.services.organizations import OrganizationsService
from toolsmith.services.security import make_access_token, verify_password
from toolsmith.services.users import UsersService

logger = logging.getLogger(__name__)

DEFAULT_ORGANIZATION_NAME = "Untitled workspace"


class AuthService:
    def __init__(self, session: AsyncSession, app_settings: Settings | None = None):
        self.session = session
        self.settings = app_settings or default_settings
        self.users_service = UsersService(session)
        self.organizations_service = OrganizationsService(session, self.settings)
        self.organization_users_service = OrganizationUsersService(session)
        self.group_permissions_service = GroupPermissionsService(session)
        self.group_permissions = GroupPermissionRepository(session)

    async def login(
        self, email: str, password: str, organization_id: str | None = None
    ) -> AuthResponse:
        user = await self.users_service.find_by_email(email) if email else None
        if user is None or not verify_password(password, user.password_digest):
            raise AuthenticationError("Invalid credentials")

        if organization_id:
            organization = await self._form_login_organization(user, organization_id)
        else:
            candidates = await self.organizations_service.find_organizations_supporting_form_login(user)
            if not candidates:
                raise AuthenticationError("No workspace available for password login")
            organization = next(
                (o for o in candidates if o.id == user.default_organization_id),
                candidates[0],
            )

        logger.info("User %s logged in to %s", user.id, organization.id)
        return await self._session_payload(user, organization)

    async def switch_organization(self, organization_id: str, user: SessionUser) -> AuthResponse:
        row = await self.users_service.find_one(user.id)
        if row is None:
            raise AuthenticationError()
        organization = await self._form_login_organization(row, organization_id)
        return await self._session_payload(row, organization)

    async def signup(self, email: str) -> dict:
        """Create a workspace and an invited user who completes setup via the token."""
        if self.settings.disable_signups:
            raise AuthorizationError("Sign up is disabled")
        if await self.users_service.find_by_email(email):
            raise ConflictError("Email already exists")

        organization = await self.organizations_service.create(DEFAULT_ORGANIZATION_NAME)
        user = await self.users_service.create(email, default_organization_id=organization.id)
        membership = await self.organization_users_service.create(user, organization, is_invite=True)
        for group in await self.group_permissions.list_for_organization(organization.id):
            await self.group_permissions_service.create_user_group_permission(user.id, group.id)

        # Email delivery is out of scope; the invitation is surfaced in logs.
        logger.info(
            "Invitation issued for user %s in %s (token=%s)",
            user.id,
            organization.id,
            membership.invitation_token,
        )
        return {}

    async def forgot_password(self, email: str) -> None:
        user = await self.users_service.find_by_email(email)
        if user is None:
            raise NotFoundError("User", email)
        token = generate_token()
        await self.users_service.set_forgot_password_token(user, token)
        logger.info("Password reset requested for user %s (token=%s)", user.id, token)

    async def reset_password(self, token: str, password: str) -> None:
        user = await self.users_service.find_by_forgot_password_token(token)
        if user is None:
            raise NotFoundError("Password reset token", "***")
        await self.users_service.update_password(user, password)
        logger.info("Password reset for user %s", user.id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _form_login_organization(self, user: UserRow, organization_id: str) -> OrganizationRow:
        """The target organization, if the user is active there and it allows form login."""
        membership = await self.organization_users_service.find_active(user.id, organization_id)
        if membership is None:
            raise AuthenticationError("User is not an active member of this workspace")

        organization = await self.organizations_service.get_sso_configs(
            organization_id, SSOKind.FORM.value
        )
        form_config = organization.sso_configs[0] if organization and organization.sso_configs else None
        if form_config is None or not form_config.enabled:
            raise AuthenticationError("Password login is disabled for this workspace")
        return organization

    async def _session_payload(self, user: UserRow, organization: OrganizationRow) -> AuthResponse:
        groups = await self.group_permissions.list_for_user(user.id, organization.id)
        group_names = [g.group for g in groups]
        return AuthResponse(
            id=user.id,
            auth_token=make_access_token(user.id, user.email, organization.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            organization_id=organization.id,
            organization=organization.name,
            admin=DefaultGroup.ADMIN.value in group_names,
            group_permissions=[
                {
                    "id": g.id,
                    "group": g.group,
                    "app_create": g.app_create,
                    "app_delete": g.app_delete,
                    "folder_create": g.folder_create,
                }
                for g in groups
            ],
        )
