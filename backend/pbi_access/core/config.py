"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from typing import Optional
import os
import sys
from pathlib import Path

APP_DIR_NAME = "powerbi-access-tool"


def default_config_path() -> Path:
    """
    Location of the stored connection settings file inside the
    per-user configuration directory
    """
    if sys.platform == "win32":
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = str(Path.home() / "Library" / "Application Support")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME / "config.json"


class AppConfig(BaseSettings):
    """Process settings loaded from environment variables"""

    # Secrets (both optional, each one switches its feature on)
    MASTER_KEY: str = ""
    ADMIN_PASSWORD: str = ""

    # Stored connection settings file
    CONFIG_PATH: Optional[Path] = None

    # Database driver
    DB_DRIVER: str = "mssql+pyodbc"
    ODBC_DRIVER: str = "ODBC Driver 18 for SQL Server"
    SQL_ECHO: bool = False

    # Sessions
    SESSION_HOURS: int = 8

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "POWERBI_"
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def config_path(self) -> Path:
        return self.CONFIG_PATH or default_config_path()

    @property
    def auth_enabled(self) -> bool:
        return self.ADMIN_PASSWORD != ""


def get_config() -> AppConfig:
    """Read the process configuration from the environment"""
    return AppConfig()
