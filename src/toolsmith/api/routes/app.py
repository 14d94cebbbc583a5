"""Authentication and health routes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from toolsmith.dependencies import CurrentUser, DBSession
from toolsmith.errors.exceptions import ValidationError
from toolsmith.models.user import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from toolsmith.services.auth import AuthService

router = APIRouter(tags=["App"])


# ── Auth endpoints ─────────────────────────────────────────────────────────────

@router.post("/authenticate", response_model=AuthResponse)
@router.post("/authenticate/{organization_id}", response_model=AuthResponse)
async def login(body: LoginRequest, db: DBSession, organization_id: str | None = None):
    return await AuthService(db).login(body.email, body.password, organization_id)


@router.get("/switch", response_model=AuthResponse)
@router.get("/switch/{organization_id}", response_model=AuthResponse)
async def switch_organization(user: CurrentUser, db: DBSession, organization_id: str | None = None):
    if not organization_id:
        raise ValidationError("organization_id is required")
    return await AuthService(db).switch_organization(organization_id, user)


@router.post("/signup")
async def signup(body: SignupRequest, db: DBSession):
    result = await AuthService(db).signup(body.email)
    await db.commit()
    return result


@router.post("/forgot_password")
async def forgot_password(body: ForgotPasswordRequest, db: DBSession):
    await AuthService(db).forgot_password(body.email)
    await db.commit()
    return {}


@router.post("/reset_password")
async def reset_password(body: ResetPasswordRequest, db: DBSession):
    await AuthService(db).reset_password(body.token, body.password)
    await db.commit()
    return {}


# ── Health ─────────────────────────────────────────────────────────────────────

@router.get("/health", tags=["Health"])
async def health_check():
    return {"works": "yeah"}


@router.post("/health", tags=["Health"])
async def post_health_check():
    """Same payload as GET; some proxies probe with POST."""
    return {"works": "yeah"}


@router.get("/health/ready", tags=["Health"])
async def readiness(request: Request):
    """Readiness probe; checks database connectivity."""
    try:
        session_factory = request.app.state.db_session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": f"error: {exc}"}},
        )
    return {"status": "ready", "checks": {"database": "ok"}}
