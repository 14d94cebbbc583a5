"""Pydantic models for organization management requests and responses."""

from datetime import datetime

from pydantic import BaseModel


class OrganizationUpdate(BaseModel):
    """Partial organization update; only fields present in the request apply."""

    name: str | None = None
    domain: str | None = None
    auto_assign: bool | None = None
    enable_sign_up: bool | None = None


class SSOConfigUpdate(BaseModel):
    """Partial SSO config update keyed by ``type`` (the provider kind).

    ``type`` is a plain string so unsupported kinds reach the service and are
    rejected there as a client error.
    """

    type: str | None = None
    configs: dict | None = None
    enabled: bool | None = None


class OrganizationResponse(BaseModel):
    id: str
    name: str
    domain: str | None
    enable_sign_up: bool
    auto_assign: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SSOConfigResponse(BaseModel):
    id: str
    organization_id: str
    sso: str
    enabled: bool
    configs: dict
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrganizationDetailsResponse(OrganizationResponse):
    sso_configs: list[SSOConfigResponse]
