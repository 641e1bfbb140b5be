"""
Persistent database connection settings

The settings file holds the server and database names in cleartext.
Username and password are stored encrypted (with the "enc:" prefix)
when a master key is configured, and in cleartext otherwise.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from pbi_access.core import encryption
from pbi_access.core.exceptions import ConfigParseError

logger = logging.getLogger(__name__)

ENCRYPTED_PREFIX = "enc:"

DEFAULT_SERVER = "tascon.database.windows.net"
DEFAULT_DATABASE = "dwh"


class StoredSettings(BaseModel):
    """Shape of the settings file; null and missing fields read as empty"""

    server: Optional[str] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    class Config:
        extra = "ignore"


@dataclass
class Settings:
    server: str = DEFAULT_SERVER
    database: str = DEFAULT_DATABASE
    username: str = ""
    password: str = ""

    @property
    def has_credentials(self) -> bool:
        return self.username != "" and self.password != ""


class SettingsStore:
    """
    Loads and saves Settings to a single JSON file

    Args:
        path: Location of the settings file
        master_key: 32-byte key for the sensitive fields, or None
    """

    def __init__(self, path: Path, master_key: Optional[bytes] = None):
        self.path = Path(path)
        self.master_key = master_key

    @property
    def encryption_enabled(self) -> bool:
        return self.master_key is not None

    def load(self) -> Settings:
        """
        Read the settings file

        A missing file yields the defaults. A file that is not a JSON
        object, or whose fields are not strings, raises ConfigParseError.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No settings file at %s, using defaults", self.path)
            return Settings()

        try:
            stored = StoredSettings.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigParseError(f"failed to parse config file: {e}")

        settings = Settings()
        if stored.server:
            settings.server = stored.server
        if stored.database:
            settings.database = stored.database

        settings.username = self._read_secret(stored.username or "")
        settings.password = self._read_secret(stored.password or "")
        return settings

    def save(self, settings: Settings) -> None:
        """Write the settings file with owner-only permissions"""
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

        stored = asdict(settings)
        stored["username"] = self._write_secret(settings.username)
        stored["password"] = self._write_secret(settings.password)

        data = json.dumps(stored, indent=2)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        # O_CREAT mode only applies to new files
        os.chmod(self.path, 0o600)
        logger.info("Settings saved to %s", self.path)

    def _read_secret(self, value: str) -> str:
        if not value.startswith(ENCRYPTED_PREFIX):
            return value
        if self.master_key is None:
            # Stored encrypted but no key: run without credentials
            logger.warning("Encrypted credential found but no master key configured")
            return ""
        return encryption.decrypt(value[len(ENCRYPTED_PREFIX):], self.master_key)

    def _write_secret(self, value: str) -> str:
        if self.master_key is not None and value:
            return ENCRYPTED_PREFIX + encryption.encrypt(value, self.master_key)
        return value
