"""Where the local phrase library lives on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "phrasemerge"
DEFAULT_DB_FILENAME: Final[str] = "phrasemerge.db"
DATA_DIR_ENV_VAR: Final[str] = "PHRASEMERGE_DATA_DIR"
DB_FILENAME_ENV_VAR: Final[str] = "PHRASEMERGE_DB_FILENAME"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Data directory holding the device-local library database.

    One SQLite file per data directory; pointing ``PHRASEMERGE_DATA_DIR`` elsewhere gives a
    separate library (handy for trying a merge against a copy).
    """

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def library_path(self, *, create_dir: bool = True) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        if create_dir:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.library_path().as_posix()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        base = optional_env_var("LOCALAPPDATA")
        return Path(base) if base else Path.home() / "AppData" / "Local"
    base = optional_env_var("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var(DATA_DIR_ENV_VAR)
    data_dir = Path(env_dir) if env_dir else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(
        data_dir=data_dir,
        database_filename=optional_env_var(DB_FILENAME_ENV_VAR) or DEFAULT_DB_FILENAME,
    )


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Return the library database URI; ``DATABASE_URI`` overrides the data directory."""

    env_uri = optional_env_var(DATABASE_URI_ENV_VAR)
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
