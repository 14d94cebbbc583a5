"""Organization management routes."""

from fastapi import APIRouter

from toolsmith.dependencies import AdminUser, CurrentUser, DBSession
from toolsmith.errors.exceptions import NotFoundError
from toolsmith.models.organization import (
    OrganizationDetailsResponse,
    OrganizationResponse,
    OrganizationUpdate,
    SSOConfigResponse,
    SSOConfigUpdate,
)
from toolsmith.services.organizations import OrganizationsService

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get("", response_model=list[OrganizationResponse])
async def list_organizations(user: CurrentUser, db: DBSession):
    return await OrganizationsService(db).fetch_organizations(user)


@router.get("/users")
async def list_users(user: CurrentUser, db: DBSession) -> dict:
    users = await OrganizationsService(db).fetch_users(user)
    return {"users": users}


@router.patch("", response_model=OrganizationResponse)
async def update_organization(body: OrganizationUpdate, user: AdminUser, db: DBSession):
    organization = await OrganizationsService(db).update_organization(user.organization_id, body)
    await db.commit()
    return organization


@router.get("/configs", response_model=OrganizationDetailsResponse)
async def get_configs(user: AdminUser, db: DBSession):
    organization = await OrganizationsService(db).fetch_organization_details(user.organization_id)
    if organization is None:
        raise NotFoundError("Organization", user.organization_id)
    return organization


@router.patch("/configs", response_model=SSOConfigResponse)
async def update_configs(body: SSOConfigUpdate, user: AdminUser, db: DBSession):
    sso_config = await OrganizationsService(db).update_organization_configs(
        user.organization_id, body
    )
    await db.commit()
    return sso_config


@router.get("/{organization_id}/public-configs")
async def get_public_configs(organization_id: str, db: DBSession) -> dict:
    """Enabled SSO providers for the login screen, without secrets."""
    configs = await OrganizationsService(db).fetch_organization_details(
        organization_id, status_list=[True], hide_sensitive_data=True
    )
    return {"sso_configs": configs}
