"""JWT Bearer authentication middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from toolsmith.services.security import decode_access_token

logger = logging.getLogger(__name__)

_ANONYMOUS = {"sub": "anonymous", "organization_id": None}


class AuthMiddleware(BaseHTTPMiddleware):
    """Decode a Bearer token, if any, into ``request.state.user``.

    Routes decide whether a session is required; this only records who is
    calling.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            request.state.user = self._validate_jwt(auth_header[7:])
        else:
            request.state.user = dict(_ANONYMOUS)
        return await call_next(request)

    @staticmethod
    def _validate_jwt(token: str) -> dict:
        try:
            payload = decode_access_token(token)
        except ValueError as exc:
            logger.debug("JWT decode failed: %s", exc)
            return {**_ANONYMOUS, "_auth_error": "Invalid token"}
        return {
            "sub": payload.get("sub", ""),
            "email": payload.get("email", ""),
            "organization_id": payload.get("organization_id"),
        }
