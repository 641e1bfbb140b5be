"""
Tests for loading and saving the connection settings file
"""

import json
import os
import stat
import sys

import pytest

from pbi_access.core.exceptions import ConfigParseError, DecryptionFailed
from pbi_access.core.settings_store import (
    DEFAULT_DATABASE,
    DEFAULT_SERVER,
    ENCRYPTED_PREFIX,
    Settings,
    SettingsStore,
)

KEY = b"0123456789abcdef0123456789abcdef"


@pytest.fixture
def path(tmp_path):
    return tmp_path / "nested" / "dir" / "config.json"


def test_load_without_file_returns_defaults(path):
    settings = SettingsStore(path, KEY).load()

    assert settings == Settings()
    assert settings.server == DEFAULT_SERVER
    assert settings.database == DEFAULT_DATABASE
    assert settings.username == ""
    assert settings.password == ""
    assert not settings.has_credentials


def test_load_invalid_json_raises(path):
    path.parent.mkdir(parents=True)
    path.write_text("{not json")

    with pytest.raises(ConfigParseError):
        SettingsStore(path).load()


def test_load_non_object_raises(path):
    path.parent.mkdir(parents=True)
    path.write_text("[1, 2, 3]")

    with pytest.raises(ConfigParseError):
        SettingsStore(path).load()


@pytest.mark.parametrize("document", [
    {"username": 5, "password": "x"},
    {"server": ["a"], "database": "d"},
    {"password": {"value": "x"}},
])
def test_load_mistyped_field_raises(path, document):
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(document))

    with pytest.raises(ConfigParseError, match="failed to parse config file"):
        SettingsStore(path).load()


def test_null_fields_read_as_empty(path):
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"server": None, "username": None, "password": "pw"}))

    loaded = SettingsStore(path).load()
    assert loaded.server == DEFAULT_SERVER
    assert loaded.username == ""
    assert loaded.password == "pw"


def test_encrypted_round_trip(path):
    store = SettingsStore(path, KEY)
    store.save(Settings(server="db.example.net", database="warehouse", username="admin", password="s3cret!"))

    stored = json.loads(path.read_text())
    assert stored["server"] == "db.example.net"
    assert stored["database"] == "warehouse"
    assert stored["username"].startswith(ENCRYPTED_PREFIX)
    assert stored["password"].startswith(ENCRYPTED_PREFIX)
    assert "s3cret!" not in path.read_text()

    loaded = SettingsStore(path, KEY).load()
    assert loaded == Settings(server="db.example.net", database="warehouse", username="admin", password="s3cret!")


def test_encrypted_field_without_key_loads_empty(path):
    SettingsStore(path, KEY).save(Settings(username="admin", password="s3cret!"))

    loaded = SettingsStore(path, None).load()
    assert loaded.username == ""
    assert loaded.password == ""


def test_encrypted_field_with_other_key_fails(path):
    SettingsStore(path, KEY).save(Settings(username="admin", password="s3cret!"))

    with pytest.raises(DecryptionFailed):
        SettingsStore(path, b"x" * 32).load()


def test_save_without_key_stores_cleartext(path):
    SettingsStore(path).save(Settings(username="admin", password="s3cret!"))

    stored = json.loads(path.read_text())
    assert stored["username"] == "admin"
    assert stored["password"] == "s3cret!"
    assert SettingsStore(path).load().password == "s3cret!"


def test_empty_secrets_not_encrypted(path):
    SettingsStore(path, KEY).save(Settings(username="", password=""))

    stored = json.loads(path.read_text())
    assert stored["username"] == ""
    assert stored["password"] == ""


def test_cleartext_file_loaded_verbatim_with_key(path):
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"username": "plain", "password": "text"}))

    loaded = SettingsStore(path, KEY).load()
    assert loaded.username == "plain"
    assert loaded.password == "text"


def test_empty_stored_fields_keep_defaults(path):
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"server": "", "database": "other"}))

    loaded = SettingsStore(path).load()
    assert loaded.server == DEFAULT_SERVER
    assert loaded.database == "other"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_file_is_owner_only(path):
    SettingsStore(path, KEY).save(Settings(username="admin", password="pw"))

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    # Overwriting an existing, more permissive file tightens it again
    os.chmod(path, 0o644)
    SettingsStore(path, KEY).save(Settings(username="admin", password="pw"))
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
