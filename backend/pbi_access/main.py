"""
FastAPI main application module for the Power BI access tool
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional
import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pbi_access.api.api import api_router
from pbi_access.api import pages
from pbi_access.core.config import AppConfig, get_config
from pbi_access.core.database import DatabaseManager
from pbi_access.core.encryption import get_master_key
from pbi_access.core.exceptions import (
    AccessToolError,
    DecryptionFailed,
    InvalidKey,
    NotFound,
    StoreError,
    StoreUnavailable,
    ValidationError,
)
from pbi_access.core.middleware import AuthMiddleware
from pbi_access.core.sessions import SessionStore
from pbi_access.core.settings_store import SettingsStore

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def log_security_config(config: AppConfig, master_key: Optional[bytes]) -> None:
    if master_key is not None:
        logger.info("Config encryption: ENABLED (POWERBI_MASTER_KEY set)")
    else:
        logger.info("Config encryption: DISABLED (set POWERBI_MASTER_KEY for encryption)")

    if config.auth_enabled:
        logger.info("Authentication: ENABLED (POWERBI_ADMIN_PASSWORD set)")
    else:
        logger.info("Authentication: DISABLED (set POWERBI_ADMIN_PASSWORD to enable)")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map application errors to HTTP responses"""

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StoreUnavailable)
    async def unavailable_handler(request: Request, exc: StoreUnavailable):
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(AccessToolError)
    async def app_error_handler(request: Request, exc: AccessToolError):
        # InvalidKey / DecryptionFailed: never echo anything about the key
        if isinstance(exc, (InvalidKey, DecryptionFailed)):
            logger.error("Credential encryption error: %s", exc.__class__.__name__)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Credential encryption error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")


def create_app(
    config: Optional[AppConfig] = None,
    database: Optional[DatabaseManager] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Build the application

    Loads the stored connection settings and connects when credentials
    are present. A failed connection is logged and the app starts
    anyway so the settings can be corrected from the UI.
    """
    config = config or get_config()
    master_key = get_master_key(config.MASTER_KEY)
    log_security_config(config, master_key)

    settings_store = SettingsStore(config.config_path, master_key)
    settings = settings_store.load()

    if database is None:
        database = DatabaseManager(config)
        if settings.has_credentials:
            try:
                database.connect(settings)
            except StoreError as e:
                logger.warning(f"Failed to connect to database: {e}")
                logger.info("Start the application and configure credentials in Settings")
        else:
            logger.info("No database credentials configured. Please configure in Settings.")

    app = FastAPI(
        title="Power BI Access Tool",
        description="Manage Power BI users and their reporting group access",
        version="1.0.0",
    )

    app.state.config = config
    app.state.settings_store = settings_store
    app.state.settings = settings
    app.state.database = database
    app.state.sessions = sessions or SessionStore(duration=timedelta(hours=config.SESSION_HOURS))

    app.add_middleware(AuthMiddleware)

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(api_router, prefix="/api")
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "database": "connected" if database.connected else "disconnected",
            "timestamp": time.time(),
        }

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown"""
        logger.info("Shutting down...")
        database.disconnect()

    return app
