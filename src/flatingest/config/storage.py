"""Where the bulk import store lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "flatingest"
DEFAULT_DB_FILENAME: Final[str] = "flatingest.db"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local_app_data = optional_env_var("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    xdg_data_home = optional_env_var("XDG_DATA_HOME")
    return Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Data directory holding the default SQLite database."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def database_path(self) -> Path:
        return self.data_dir.expanduser().resolve() / self.database_filename

    def sqlite_uri(self) -> str:
        """Return the SQLite URI of :attr:`database_path`, creating its directory."""

        path = self.database_path
        path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{path}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    configured = optional_env_var("FLATINGEST_DATA_DIR")
    data_dir = Path(configured) if configured else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file inside the data directory."""

    uri = optional_env_var("DATABASE_URI")
    if uri is None:
        uri = (storage or get_storage_config()).sqlite_uri()
    return DatabaseConfig(uri=uri)
