"""Where the compendium database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "abcsync"
DEFAULT_DB_FILENAME: Final[str] = "compendium.db"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Data directory holding the SQLite compendium file."""

    data_dir: Path
    compendium_filename: str = DEFAULT_DB_FILENAME

    def compendium_path(self, *, create_dir: bool = True) -> Path:
        directory = self.data_dir.expanduser().resolve()
        if create_dir:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / self.compendium_filename

    def compendium_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.compendium_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    override = os.getenv("ABCSYNC_DATA_DIR", "").strip()
    data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``COMPENDIUM_DATABASE_URI`` when set, else the file in the data dir."""

    uri = os.getenv("COMPENDIUM_DATABASE_URI", "").strip()
    if not uri:
        uri = (storage or get_storage_config()).compendium_uri()
    return DatabaseConfig(uri=uri)
