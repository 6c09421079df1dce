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


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Keel"
    DB_FILENAME = "keel.db"
    LOG_FILENAME = "keel.log"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("KEEL_DEV_MODE", default=True)
        self.LOG_LEVEL = os.getenv("KEEL_LOG_LEVEL", "INFO").upper()
        self.DATABASE_URL = os.getenv("KEEL_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("KEEL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration for test runs backed by an in-memory database."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
        self.DEV_MODE = True
