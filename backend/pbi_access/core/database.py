"""
Database connection and session management

The live engine is built from the stored connection settings and can be
replaced at runtime when the settings change. Request handlers obtain
sessions through DatabaseManager.session(), which raises StoreUnavailable
while no connection is configured.
"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Optional
import logging
import threading

from pbi_access.core.config import AppConfig
from pbi_access.core.exceptions import StoreError, StoreUnavailable
from pbi_access.core.settings_store import Settings
from pbi_access.models.base import Base, ACCESS_SCHEMA, DIMENSION_SCHEMA

logger = logging.getLogger(__name__)


def build_database_url(settings: Settings, config: AppConfig) -> URL:
    """
    Build the SQLAlchemy URL for the configured server and database

    For SQLite drivers the database field is the file path and the
    server and credentials are ignored.
    """
    if config.DB_DRIVER.startswith("sqlite"):
        return URL.create(config.DB_DRIVER, database=settings.database or None)

    return URL.create(
        config.DB_DRIVER,
        username=settings.username,
        password=settings.password,
        host=settings.server,
        database=settings.database,
        query={"driver": config.ODBC_DRIVER},
    )


def create_db_engine(url, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL

    SQLite has no schemas, so the warehouse schemas are mapped away.
    """
    url = make_url(url)

    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(
            url,
            echo=echo,
            execution_options={
                "schema_translate_map": {ACCESS_SCHEMA: None, DIMENSION_SCHEMA: None}
            },
            **kwargs,
        )

    engine = create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=10,
        max_overflow=20,
        echo=echo,  # Log SQL queries in debug mode
    )

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        logger.debug("Database connection established")

    return engine


def check_database_connection(engine: Engine) -> None:
    """
    Run a trivial query, raising StoreError when the database
    cannot be reached
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise StoreError(f"failed to connect to database: {e}") from e


def create_all_tables(engine: Engine) -> None:
    """
    Create all tables known to the models
    Note: the production warehouse owns its schema; this is for local
    SQLite databases only
    """
    Base.metadata.create_all(bind=engine)
    logger.info("All database tables created successfully")


class DatabaseManager:
    """
    Owns the current engine and its session factory

    The reference is swapped under a lock; readers take the lock only
    long enough to create a session bound to the current engine.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self._lock = threading.Lock()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._engine is not None

    def connect(self, settings: Settings) -> None:
        """
        Replace the current connection with one built from settings

        Without credentials the manager is left disconnected. A failed
        connection attempt also leaves it disconnected and raises
        StoreError.
        """
        self.disconnect()

        if not settings.has_credentials:
            logger.info("No database credentials configured")
            return

        logger.info("Connecting to database %s on %s...", settings.database, settings.server)
        try:
            url = build_database_url(settings, self.config)
            engine = create_db_engine(url, echo=self.config.SQL_ECHO)
        except (SQLAlchemyError, ImportError) as e:
            # Unknown dialect or missing DBAPI driver
            logger.error("Failed to create database engine: %s", e)
            raise StoreError(f"failed to connect to database: {e}") from e

        try:
            check_database_connection(engine)
        except StoreError:
            engine.dispose()
            logger.error("Failed to connect to database %s on %s", settings.database, settings.server)
            raise

        self.attach(engine)
        logger.info("Connected to database successfully")

    def attach(self, engine: Engine) -> None:
        """Make engine the current connection, disposing the previous one"""
        factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine,
            expire_on_commit=False  # Keep objects accessible after commit
        )
        with self._lock:
            old = self._engine
            self._engine = engine
            self._session_factory = factory
        if old is not None and old is not engine:
            # Checked-out connections are closed when their requests return them
            old.dispose()

    def disconnect(self) -> None:
        with self._lock:
            old = self._engine
            self._engine = None
            self._session_factory = None
        if old is not None:
            old.dispose()
            logger.info("Database connection closed")

    def session(self) -> Session:
        """Open a session on the current engine"""
        with self._lock:
            factory = self._session_factory
        if factory is None:
            raise StoreUnavailable()
        return factory()
