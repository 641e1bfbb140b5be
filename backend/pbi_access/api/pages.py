"""
Server-rendered pages: login, logout, index and settings
"""

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
import hmac
import logging

from pbi_access.api.deps import (
    get_config,
    get_database,
    get_sessions,
    get_settings,
    get_settings_store,
)
from pbi_access.core.config import AppConfig
from pbi_access.core.database import DatabaseManager
from pbi_access.core.exceptions import StoreError
from pbi_access.core.sessions import SESSION_COOKIE_NAME, SessionStore
from pbi_access.core.settings_store import Settings, SettingsStore

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def password_matches(supplied: str, expected: str) -> bool:
    """Constant-time password comparison"""
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, error: str = "", sessions: SessionStore = Depends(get_sessions)):
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token and sessions.valid(token):
        return _redirect("/")

    return templates.TemplateResponse(request, "login.html", {"error": error})


@router.post("/login")
def login(
    request: Request,
    password: str = Form(""),
    config: AppConfig = Depends(get_config),
    sessions: SessionStore = Depends(get_sessions),
):
    """
    Check the admin password and start a session

    Without a configured admin password every attempt succeeds.
    """
    if config.auth_enabled and not password_matches(password, config.ADMIN_PASSWORD):
        logger.warning("Failed login attempt from %s", request.client.host if request.client else "unknown")
        return _redirect("/login?error=invalid")

    token = sessions.create()
    response = _redirect("/")
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        path="/",
        httponly=True,
        secure=request.url.scheme == "https",
        samesite="lax",
        max_age=int(sessions.duration.total_seconds()),
    )
    return response


@router.get("/logout")
def logout(request: Request, sessions: SessionStore = Depends(get_sessions)):
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        sessions.delete(token)

    response = _redirect("/login")
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/", httponly=True)
    return response


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------
@router.get("/", response_class=HTMLResponse)
def index_page(request: Request, config: AppConfig = Depends(get_config)):
    return templates.TemplateResponse(request, "index.html", {"auth_enabled": config.auth_enabled})


@router.get("/settings", response_class=HTMLResponse)
def settings_page(
    request: Request,
    saved: str = "",
    error: str = "",
    settings: Settings = Depends(get_settings),
    database: DatabaseManager = Depends(get_database),
    config: AppConfig = Depends(get_config),
):
    context = {
        "server": settings.server,
        "database": settings.database,
        "username": settings.username,
        "has_password": settings.password != "",
        "saved": saved == "1",
        "connected": database.connected,
        "error": error,
        "auth_enabled": config.auth_enabled,
    }
    return templates.TemplateResponse(request, "settings.html", context)


@router.post("/settings")
def save_settings(
    request: Request,
    server: str = Form(""),
    database_name: str = Form("", alias="database"),
    username: str = Form(""),
    password: str = Form(""),
    current: Settings = Depends(get_settings),
    store: SettingsStore = Depends(get_settings_store),
    database: DatabaseManager = Depends(get_database),
):
    """
    Persist the connection settings and reconnect

    A blank password keeps the stored one.
    """
    updated = Settings(
        server=server,
        database=database_name,
        username=username,
        password=password or current.password,
    )

    store.save(updated)
    request.app.state.settings = updated

    try:
        database.connect(updated)
    except StoreError as e:
        logger.warning(f"Reconnect after settings change failed: {e}")
        return _redirect("/settings?saved=1&error=connection")

    return _redirect("/settings?saved=1")
