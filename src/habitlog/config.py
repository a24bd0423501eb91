"""Application configuration objects and helpers."""

from __future__ import annotations

import logging
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

    APP_NAME = "habitlog"
    DB_FILENAME = "habitlog.db"
    LOG_FILENAME = "habitlog.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITLOG_DEV_MODE", default=True)
        self.LOG_LEVEL = self._resolve_log_level(os.getenv("HABITLOG_LOG_LEVEL", "INFO"))
        self.DATABASE_URL = os.getenv("HABITLOG_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITLOG_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _resolve_log_level(name: str) -> int:
        level = logging.getLevelName(name.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"HABITLOG_LOG_LEVEL has an unknown level name: {name!r}")
        return level

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


class TestConfig(BaseConfig):
    """Throwaway in-memory database for test runs."""

    __test__ = False  # keep pytest from collecting this class

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        options = super().sqlalchemy_engine_options()
        options["poolclass"] = StaticPool
        return options
