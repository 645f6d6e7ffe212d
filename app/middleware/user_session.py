from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import SESSION_COOKIE_NAME
from app.services.session_auth import decode_session


class UserSessionMiddleware(BaseHTTPMiddleware):
    """Centralized session decoding from HTTP-only cookie."""

    async def dispatch(self, request, call_next):
        request.state.session_payload = None

        if request.url.path.startswith("/api"):
            token = request.cookies.get(SESSION_COOKIE_NAME)
            if token:
                request.state.session_payload = decode_session(token)

        return await call_next(request)
