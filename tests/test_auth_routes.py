"""Tests for authentication routes: authenticate, switch, signup and password reset."""

import pytest
from sqlalchemy import select

from toolsmith.db.models.user import OrganizationUserRow, UserRow
from toolsmith.services.organizations import OrganizationsService
from toolsmith.services.security import decode_access_token


# ---------------------------------------------------------------------------
# authenticate
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_authenticate_returns_session(client, seed_workspace):
    user, organization, _ = await seed_workspace()

    r = await client.post(
        "/api/authenticate",
        json={"email": "owner@example.com", "password": "password123"},
    )

    assert r.status_code == 200
    data = r.json()
    assert data["id"] == user.id
    assert data["organization_id"] == organization.id
    assert data["organization"] == "Acme"
    assert data["admin"] is True
    assert {g["group"] for g in data["group_permissions"]} == {"admin", "all_users"}
    claims = decode_access_token(data["auth_token"])
    assert claims["sub"] == user.id
    assert claims["organization_id"] == organization.id


@pytest.mark.asyncio
async def test_authenticate_wrong_password(client, seed_workspace):
    await seed_workspace()

    r = await client.post(
        "/api/authenticate",
        json={"email": "owner@example.com", "password": "nope"},
    )

    assert r.status_code == 401
    assert r.json()["error"]["code"] == "AUTHENTICATION_ERROR"


@pytest.mark.asyncio
async def test_authenticate_into_named_organization(client, db_session, seed_workspace):
    user, _, _ = await seed_workspace()
    second = await OrganizationsService(db_session).create("Beta", user)
    await db_session.commit()

    r = await client.post(
        f"/api/authenticate/{second.id}",
        json={"email": "owner@example.com", "password": "password123"},
    )

    assert r.status_code == 200
    assert r.json()["organization_id"] == second.id


@pytest.mark.asyncio
async def test_authenticate_rejects_non_member_organization(client, db_session, seed_workspace):
    await seed_workspace()
    foreign = await OrganizationsService(db_session).create("Foreign")
    await db_session.commit()

    r = await client.post(
        f"/api/authenticate/{foreign.id}",
        json={"email": "owner@example.com", "password": "password123"},
    )

    assert r.status_code == 401


@pytest.mark.asyncio
async def test_authenticate_rejects_disabled_form_login(client, db_session, seed_workspace):
    _, organization, _ = await seed_workspace()
    organization.sso_configs[0].enabled = False
    await db_session.commit()

    r = await client.post(
        "/api/authenticate",
        json={"email": "owner@example.com", "password": "password123"},
    )

    assert r.status_code == 401


# ---------------------------------------------------------------------------
# switch
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_switch_requires_session(client):
    r = await client.get("/api/switch/org_anything")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_switch_rejects_invalid_token(client):
    r = await client.get("/api/switch/org_anything", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_switch_without_organization_id(client, seed_workspace):
    _, _, headers = await seed_workspace()

    r = await client.get("/api/switch", headers=headers)

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_switch_to_member_organization(client, db_session, seed_workspace):
    user, _, headers = await seed_workspace()
    second = await OrganizationsService(db_session).create("Beta", user)
    await db_session.commit()

    r = await client.get(f"/api/switch/{second.id}", headers=headers)

    assert r.status_code == 200
    data = r.json()
    assert data["organization_id"] == second.id
    assert decode_access_token(data["auth_token"])["organization_id"] == second.id


@pytest.mark.asyncio
async def test_switch_to_foreign_organization(client, db_session, seed_workspace):
    _, _, headers = await seed_workspace()
    foreign = await OrganizationsService(db_session).create("Foreign")
    await db_session.commit()

    r = await client.get(f"/api/switch/{foreign.id}", headers=headers)

    assert r.status_code == 401


# ---------------------------------------------------------------------------
# signup
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_signup_creates_invited_user_and_workspace(client, db_session):
    r = await client.post("/api/signup", json={"email": "New@Example.com"})

    assert r.status_code == 200
    assert r.json() == {}

    user = (
        await db_session.execute(select(UserRow).where(UserRow.email == "new@example.com"))
    ).scalar_one()
    membership = (
        await db_session.execute(
            select(OrganizationUserRow).where(OrganizationUserRow.user_id == user.id)
        )
    ).scalar_one()
    assert membership.status == "invited"
    assert membership.invitation_token
    assert membership.organization_id == user.default_organization_id


@pytest.mark.asyncio
async def test_signup_duplicate_email(client, seed_workspace):
    await seed_workspace()

    r = await client.post("/api/signup", json={"email": "owner@example.com"})

    assert r.status_code == 409


@pytest.mark.asyncio
async def test_signup_disabled(client, monkeypatch):
    from toolsmith.config import settings

    monkeypatch.setattr(settings, "disable_signups", True)

    r = await client.post("/api/signup", json={"email": "someone@example.com"})

    assert r.status_code == 403


# ---------------------------------------------------------------------------
# password reset
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_forgot_and_reset_password(client, db_session, seed_workspace):
    user, _, _ = await seed_workspace()

    r = await client.post("/api/forgot_password", json={"email": "owner@example.com"})
    assert r.status_code == 200
    assert r.json() == {}

    token = (
        await db_session.execute(
            select(UserRow.forgot_password_token).where(UserRow.id == user.id)
        )
    ).scalar_one()
    assert token

    r = await client.post("/api/reset_password", json={"token": token, "password": "brand-new-pw"})
    assert r.status_code == 200
    assert r.json() == {}

    r = await client.post(
        "/api/authenticate",
        json={"email": "owner@example.com", "password": "brand-new-pw"},
    )
    assert r.status_code == 200

    r = await client.post("/api/reset_password", json={"token": token, "password": "another-pw"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_forgot_password_unknown_email(client):
    r = await client.post("/api/forgot_password", json={"email": "ghost@example.com"})
    assert r.status_code == 404
