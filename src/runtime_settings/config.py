"""Configuration objects for the settings store."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _is_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"}


class BaseConfig:
    """Base configuration shared across environments.

    ``HANDLERS`` lists the handler chain in resolution order. Each handler
    reads its options from the attribute of the same name upper-cased
    (``ARRAY``, ``DATABASE``); the last handler whose ``writeable`` option is
    true becomes the primary handler.
    """

    APP_NAME = "runtime-settings"
    DB_FILENAME = "settings.db"
    HANDLERS = ["database"]
    ARRAY = {"writeable": True}
    DATABASE = {"table": "settings", "group": "default", "writeable": True}
    SQLITE_CONNECT_ARGS = {"check_same_thread": False}

    def __init__(self) -> None:
        self.HANDLERS = list(type(self).HANDLERS)
        self.ARRAY = dict(type(self).ARRAY)
        self.DATABASE = dict(type(self).DATABASE)
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("RUNTIME_SETTINGS_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("RUNTIME_SETTINGS_DATABASE_URL", self._build_sqlite_url())
        self.DATABASE_GROUPS = {"default": self.DATABASE_URL}

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("RUNTIME_SETTINGS_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def handler_options(self, handler: str) -> dict[str, Any]:
        """Return the option mapping for a handler identifier."""

        return dict(getattr(self, handler.upper(), None) or {})

    def sqlalchemy_engine_options(self, url: str | None = None) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        url = url or self.DATABASE_URL
        engine_options: dict[str, Any] = {}
        if url.startswith("sqlite"):
            engine_options["connect_args"] = dict(self.SQLITE_CONNECT_ARGS)
            if _is_memory_sqlite(url):
                # One shared connection, otherwise every checkout sees an empty database.
                engine_options["poolclass"] = StaticPool
        return engine_options


class TestConfig(BaseConfig):
    """In-memory configuration used by the test-suite."""

    __test__ = False

    HANDLERS = ["array"]

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = "sqlite://"
        self.DATABASE_GROUPS = {"default": self.DATABASE_URL, "tests": self.DATABASE_URL}
