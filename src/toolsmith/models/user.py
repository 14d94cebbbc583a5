"""Pydantic models for authentication and sessions."""

from pydantic import BaseModel, EmailStr, Field


# ── Request models ─────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class SignupRequest(BaseModel):
    email: EmailStr


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    token: str
    password: str = Field(min_length=5)


# ── Session models ─────────────────────────────────────────────────────────────

class SessionUser(BaseModel):
    """The authenticated caller, scoped to the organization in their token."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    organization_id: str | None = None

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    id: str
    auth_token: str
    email: str
    first_name: str | None
    last_name: str | None
    organization_id: str
    organization: str
    admin: bool
    group_permissions: list[dict]
