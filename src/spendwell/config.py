"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Spendwell"
    DB_FILENAME = "spendwell.db"
    DEBUG = False
    TESTING = False
    JSON_SORT_KEYS = False
    USER_HEADER = "X-User-Id"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SPENDWELL_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SPENDWELL_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("SPENDWELL_DATABASE_URL", self._build_sqlite_url())
        self.DASHBOARD_WORKERS = _env_int("SPENDWELL_DASHBOARD_WORKERS", 6)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("SPENDWELL_SECRET_KEY must be set in non-dev mode.")
        if self.DASHBOARD_WORKERS < 1:
            raise ValueError("SPENDWELL_DASHBOARD_WORKERS must be at least 1.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("SPENDWELL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            # Dashboard loaders read from worker threads.
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite and local smoke runs."""

    TESTING = True
    __test__ = False  # keep pytest from collecting this class

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
