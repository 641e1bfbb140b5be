"""
Login gate for every route except the login flow and static assets
"""

import logging
from typing import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pbi_access.core.sessions import SESSION_COOKIE_NAME

logger = logging.getLogger(__name__)

# Paths reachable without a session
PUBLIC_PATHS = {"/login", "/logout", "/health"}
PUBLIC_PREFIXES = ("/static/",)


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Redirects requests without a valid session cookie to /login

    Does nothing while no admin password is configured.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if is_public_path(request.url.path):
            return await call_next(request)

        if not request.app.state.config.auth_enabled:
            return await call_next(request)

        token = request.cookies.get(SESSION_COOKIE_NAME)
        if not token or not request.app.state.sessions.valid(token):
            return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)

        return await call_next(request)
