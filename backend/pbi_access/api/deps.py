"""
FastAPI dependencies shared by the routers
"""

from typing import Generator
import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from pbi_access.core.config import AppConfig
from pbi_access.core.database import DatabaseManager
from pbi_access.core.sessions import SessionStore
from pbi_access.core.settings_store import Settings, SettingsStore
from pbi_access.repositories import AccessRepository, GroupRepository, UserRepository

logger = logging.getLogger(__name__)


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_database(request: Request) -> DatabaseManager:
    return request.app.state.database


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(database: DatabaseManager = Depends(get_database)) -> Generator[Session, None, None]:
    """
    Dependency to get a database session

    Raises StoreUnavailable when no connection is configured.
    """
    db = database.session()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_access_repository(db: Session = Depends(get_db)) -> AccessRepository:
    return AccessRepository(db)


def get_group_repository(db: Session = Depends(get_db)) -> GroupRepository:
    return GroupRepository(db)
