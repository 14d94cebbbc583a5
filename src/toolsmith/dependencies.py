"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from toolsmith.errors.exceptions import AuthenticationError, AuthorizationError
from toolsmith.models.enums import DefaultGroup
from toolsmith.models.user import SessionUser
from toolsmith.services.users import UsersService


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")


async def get_current_user(
    request: Request, db: AsyncSession = Depends(get_db)
) -> SessionUser:
    """Session guard: the caller behind a valid bearer token, or 401."""
    claims = getattr(request.state, "user", {}) or {}
    if "_auth_error" in claims:
        raise AuthenticationError(claims["_auth_error"])
    if claims.get("sub") in (None, "", "anonymous"):
        raise AuthenticationError("Authentication required")

    user = await UsersService(db).find_one(claims["sub"])
    if user is None:
        raise AuthenticationError("User not found")
    return SessionUser(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        organization_id=claims.get("organization_id"),
    )


def require_group(group: str):
    """Return a dependency that enforces membership of ``group`` in the caller's organization."""

    async def _check(
        user: SessionUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ) -> SessionUser:
        if not await UsersService(db).has_group(user, group):
            raise AuthorizationError(f"Requires group: {group}")
        return user

    return _check


# Type aliases for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
TraceId = Annotated[str, Depends(get_trace_id)]
CurrentUser = Annotated[SessionUser, Depends(get_current_user)]
AdminUser = Annotated[SessionUser, Depends(require_group(DefaultGroup.ADMIN.value))]
