"""Tests for OrganizationsService.

Covers:
- default groups and creator membership on create
- form login flag derived from configuration
- membership serialization and admin-only invitation tokens
- organization listing filters and ordering
- SSO detail redaction
- partial updates and SSO config upserts
"""

import logging

import pytest
from sqlalchemy import func, select

from toolsmith.config import Settings
from toolsmith.db.models.group_permission import GroupPermissionRow, UserGroupPermissionRow
from toolsmith.db.models.organization import SSOConfigRow
from toolsmith.db.models.user import OrganizationUserRow
from toolsmith.errors.exceptions import NotFoundError, ValidationError
from toolsmith.models.organization import OrganizationUpdate, SSOConfigUpdate
from toolsmith.models.user import SessionUser
from toolsmith.services.organization_users import OrganizationUsersService
from toolsmith.services.organizations import OrganizationsService
from toolsmith.services.users import UsersService


def _session_user(user, organization) -> SessionUser:
    return SessionUser(id=user.id, email=user.email, organization_id=organization.id)


async def _groups(db_session, organization_id: str) -> dict[str, GroupPermissionRow]:
    result = await db_session.execute(
        select(GroupPermissionRow).where(GroupPermissionRow.organization_id == organization_id)
    )
    return {g.group: g for g in result.scalars().all()}


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

async def test_create_makes_two_default_groups(db_session):
    organization = await OrganizationsService(db_session).create("Acme")

    groups = await _groups(db_session, organization.id)
    assert set(groups) == {"all_users", "admin"}
    admin = groups["admin"]
    assert admin.app_create and admin.app_delete and admin.folder_create
    everyone = groups["all_users"]
    assert not (everyone.app_create or everyone.app_delete or everyone.folder_create)


async def test_create_without_user_adds_no_members(db_session):
    organization = await OrganizationsService(db_session).create("Acme")

    count = await db_session.scalar(
        select(func.count()).select_from(OrganizationUserRow).where(
            OrganizationUserRow.organization_id == organization.id
        )
    )
    assert count == 0


async def test_create_with_user_grants_active_membership_and_groups(db_session):
    user = await UsersService(db_session).create("ada@example.com", password="secret12")
    organization = await OrganizationsService(db_session).create("Acme", user)

    membership = await OrganizationUsersService(db_session).find_active(user.id, organization.id)
    assert membership is not None
    assert membership.status == "active"
    assert membership.invitation_token is None

    result = await db_session.execute(
        select(GroupPermissionRow.group)
        .join(UserGroupPermissionRow, UserGroupPermissionRow.group_permission_id == GroupPermissionRow.id)
        .where(UserGroupPermissionRow.user_id == user.id)
    )
    assert sorted(result.scalars().all()) == ["admin", "all_users"]


@pytest.mark.parametrize("disabled, expected", [(False, True), (True, False)])
async def test_create_form_login_follows_configuration(db_session, disabled, expected):
    service = OrganizationsService(db_session, Settings(disable_password_login=disabled))
    organization = await service.create("Acme")

    assert len(organization.sso_configs) == 1
    form = organization.sso_configs[0]
    assert form.sso == "form"
    assert form.enabled is expected


# ---------------------------------------------------------------------------
# fetch_users
# ---------------------------------------------------------------------------

async def _org_with_invitee(db_session):
    users = UsersService(db_session)
    owner = await users.create("owner@example.com", first_name="Ada", last_name="Owner")
    organization = await OrganizationsService(db_session).create("Acme", owner)
    invitee = await users.create("new@example.com", first_name="Bo", last_name="New")
    await OrganizationUsersService(db_session).create(invitee, organization, is_invite=True)
    await db_session.flush()
    return owner, invitee, organization


async def test_fetch_users_includes_tokens_for_admin(db_session):
    owner, _, organization = await _org_with_invitee(db_session)

    users = await OrganizationsService(db_session).fetch_users(_session_user(owner, organization))

    by_email = {u["email"]: u for u in users}
    assert set(by_email) == {"owner@example.com", "new@example.com"}
    assert by_email["new@example.com"]["status"] == "invited"
    assert by_email["new@example.com"]["name"] == "Bo New"
    assert by_email["new@example.com"]["invitation_token"]
    assert "invitation_token" not in by_email["owner@example.com"]


async def test_fetch_users_hides_tokens_from_non_admin(db_session):
    _, invitee, organization = await _org_with_invitee(db_session)

    users = await OrganizationsService(db_session).fetch_users(_session_user(invitee, organization))

    assert len(users) == 2
    assert all("invitation_token" not in u for u in users)


# ---------------------------------------------------------------------------
# organization listings
# ---------------------------------------------------------------------------

async def test_fetch_organizations_only_active_memberships_sorted(db_session):
    users = UsersService(db_session)
    service = OrganizationsService(db_session)
    user = await users.create("ada@example.com")
    zeta = await service.create("Zeta", user)
    alpha = await service.create("Alpha", user)
    invited_to = await service.create("Invited Co")
    await OrganizationUsersService(db_session).create(user, invited_to, is_invite=True)
    await db_session.flush()

    organizations = await service.fetch_organizations(user)

    assert [o.id for o in organizations] == [alpha.id, zeta.id]


async def test_form_login_listing_requires_enabled_form_config(db_session):
    users = UsersService(db_session)
    service = OrganizationsService(db_session)
    user = await users.create("ada@example.com")
    open_org = await service.create("Open", user)
    closed_org = await service.create("Closed", user)
    closed_org.sso_configs[0].enabled = False
    await db_session.flush()

    organizations = await service.find_organizations_supporting_form_login(user)

    assert [o.id for o in organizations] == [open_org.id]


# ---------------------------------------------------------------------------
# SSO details
# ---------------------------------------------------------------------------

async def _add_config(db_session, organization_id, sso, enabled, configs, config_id):
    db_session.add(
        SSOConfigRow(id=config_id, organization_id=organization_id, sso=sso, enabled=enabled, configs=configs)
    )
    await db_session.flush()


async def test_details_redacted_mapping(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    await _add_config(
        db_session, organization.id, "google", True,
        {"client_id": "gid", "client_secret": "shh"}, "sso_google",
    )
    await _add_config(
        db_session, organization.id, "git", False,
        {"client_id": "hid", "client_secret": "shh", "host_name": "https://git.example.com"}, "sso_git",
    )
    await _add_config(db_session, organization.id, "saml", True, {"client_secret": "shh"}, "sso_saml")

    details = await service.fetch_organization_details(organization.id, hide_sensitive_data=True)

    assert set(details) == {"form", "google", "git"}
    assert details["google"] == {"sso": "google", "enabled": True, "configs": {"client_id": "gid"}}
    assert details["git"]["configs"] == {"client_id": "hid", "host_name": "https://git.example.com"}
    for entry in details.values():
        assert "client_secret" not in entry["configs"]
        for key in ("id", "organization_id", "created_at", "updated_at"):
            assert key not in entry


async def test_details_filtered_by_status(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    await _add_config(db_session, organization.id, "google", False, {"client_id": "gid"}, "sso_google")

    details = await service.fetch_organization_details(
        organization.id, status_list=[True], hide_sensitive_data=True
    )
    assert set(details) == {"form"}

    full = await service.fetch_organization_details(organization.id)
    assert {c.sso for c in full.sso_configs} == {"form", "google"}


async def test_details_for_unknown_organization(db_session):
    service = OrganizationsService(db_session)
    assert await service.fetch_organization_details("org_missing") is None
    assert await service.fetch_organization_details("org_missing", hide_sensitive_data=True) == {}


async def test_details_skip_malformed_known_kind(db_session, caplog):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    await _add_config(db_session, organization.id, "google", True, {"client_id": ["gid"]}, "sso_google")

    with caplog.at_level(logging.WARNING, logger="toolsmith.services.organizations"):
        details = await service.fetch_organization_details(organization.id, hide_sensitive_data=True)

    assert set(details) == {"form"}
    assert "malformed google SSO config sso_google" in caplog.text
    assert "unrecognized" not in caplog.text


async def test_get_single_organization(db_session):
    service = OrganizationsService(db_session)
    assert await service.get_single_organization() is None

    organization = await service.create("Acme")

    single = await service.get_single_organization()
    assert single is not None
    assert single.id == organization.id


async def test_get_sso_configs_filters_by_kind(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")

    with_google = await service.get_sso_configs(organization.id, "google")
    assert with_google is not None
    assert with_google.sso_configs == []

    with_form = await service.get_sso_configs(organization.id, "form")
    assert [c.sso for c in with_form.sso_configs] == ["form"]


async def test_get_configs_only_enabled(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    form_id = organization.sso_configs[0].id

    config = await service.get_configs(form_id)
    assert config is not None
    assert config.organization.id == organization.id

    organization.sso_configs[0].enabled = False
    await db_session.flush()
    assert await service.get_configs(form_id) is None


# ---------------------------------------------------------------------------
# updates
# ---------------------------------------------------------------------------

async def test_update_organization_applies_only_present_fields(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    organization.domain = "acme.io"
    await db_session.flush()

    await service.update_organization(organization.id, OrganizationUpdate(enable_sign_up=True))

    assert organization.name == "Acme"
    assert organization.domain == "acme.io"
    assert organization.enable_sign_up is True


async def test_update_organization_missing(db_session):
    with pytest.raises(NotFoundError):
        await OrganizationsService(db_session).update_organization(
            "org_missing", OrganizationUpdate(name="x")
        )


async def test_update_configs_rejects_unknown_kind_before_writing(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    await db_session.flush()

    for kind in ("saml", None, ""):
        with pytest.raises(ValidationError):
            await service.update_organization_configs(
                organization.id, SSOConfigUpdate(type=kind, enabled=True)
            )

    count = await db_session.scalar(select(func.count()).select_from(SSOConfigRow))
    assert count == 1


async def test_update_configs_creates_missing_kind(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")

    created = await service.update_organization_configs(
        organization.id,
        SSOConfigUpdate(type="google", configs={"client_id": "gid", "client_secret": "s", "junk": 1}),
    )

    assert created.sso == "google"
    assert created.organization_id == organization.id
    assert created.enabled is False
    assert created.configs == {"client_id": "gid", "client_secret": "s"}


async def test_update_configs_updates_existing_without_clobbering(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")
    await service.update_organization_configs(
        organization.id,
        SSOConfigUpdate(type="git", configs={"client_id": "hid", "client_secret": "s"}, enabled=True),
    )

    updated = await service.update_organization_configs(
        organization.id, SSOConfigUpdate(type="git", enabled=False)
    )

    assert updated.enabled is False
    assert updated.configs == {"client_id": "hid", "client_secret": "s"}
    count = await db_session.scalar(
        select(func.count()).select_from(SSOConfigRow).where(SSOConfigRow.sso == "git")
    )
    assert count == 1


async def test_update_configs_rejects_malformed_configs_before_writing(db_session):
    service = OrganizationsService(db_session)
    organization = await service.create("Acme")

    with pytest.raises(ValidationError) as exc_info:
        await service.update_organization_configs(
            organization.id, SSOConfigUpdate(type="google", configs={"client_id": 123})
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.details[0]["loc"] == ("client_id",)
    count = await db_session.scalar(
        select(func.count()).select_from(SSOConfigRow).where(SSOConfigRow.sso == "google")
    )
    assert count == 0
