"""
Shared fixtures: in-memory SQLite warehouse and an app wired to it
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from pbi_access.core.config import AppConfig
from pbi_access.core.database import DatabaseManager, create_all_tables, create_db_engine
from pbi_access.main import create_app
from pbi_access.models import Group

TEST_KEY = "0123456789abcdef0123456789abcdef"

GROUPS = [
    # bkey, name, level2, level3
    (1, "Sales North", "Sales", "North"),
    (2, "Sales South", "Sales", "South"),
    (3, "Retail Sales Desk", "Retail", "Sales Desk"),
    (4, "Finance Operations", "Finance", "Operations"),
]


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def groups(db_session):
    for bkey, name, level2, level3 in GROUPS:
        db_session.add(Group(group_bkey=bkey, group_name=name, level2_name=level2, level3_name=level3))
    db_session.commit()
    return GROUPS


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides) -> AppConfig:
        values = {
            "CONFIG_PATH": tmp_path / "config" / "config.json",
            "MASTER_KEY": "",
            "ADMIN_PASSWORD": "",
        }
        values.update(overrides)
        return AppConfig(_env_file=None, **values)
    return _make


@pytest.fixture
def make_client(make_config, engine):
    """Build a TestClient; the app uses the shared in-memory engine unless connected=False"""
    def _make(connected: bool = True, **overrides) -> TestClient:
        config = make_config(**overrides)
        database = DatabaseManager(config)
        if connected:
            database.attach(engine)
        app = create_app(config, database=database)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, groups):
    return make_client()
