"""Database infrastructure: connection groups, engines and the settings table."""

from __future__ import annotations

from sqlalchemy import Table
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from ..config import BaseConfig
from ..errors import InvalidGroupError
from ..logging_config import get_logger
from ..models.setting import DEFAULT_TABLE, Setting

logger = get_logger("infra.database")


def settings_table(name: str = DEFAULT_TABLE) -> Table:
    """Return the table object for a configured settings table name.

    Non-default names get a copy of the ``Setting`` table definition
    registered on the same metadata.
    """

    base = Setting.__table__
    if name == base.name:
        return base
    existing = SQLModel.metadata.tables.get(name)
    if existing is not None:
        return existing
    return base.to_metadata(SQLModel.metadata, name=name)


def create_db_engine(url: str, config: BaseConfig | None = None) -> Engine:
    """Create an engine for ``url`` with the configured engine options."""

    cfg = config or BaseConfig()
    return create_engine(url, **cfg.sqlalchemy_engine_options(url))


def init_database(engine: Engine, table: str = DEFAULT_TABLE) -> None:
    """Create the settings table if it does not exist yet."""

    SQLModel.metadata.create_all(engine, tables=[settings_table(table)])


class ConnectionGroups:
    """Named database connections, each backed by one lazily created engine."""

    def __init__(self, config: BaseConfig | None = None):
        self.config = config or BaseConfig()
        self._urls: dict[str, str] = dict(self.config.DATABASE_GROUPS)
        self._engines: dict[str, Engine] = {}

    def __contains__(self, group: object) -> bool:
        return group in self._urls or group in self._engines

    def groups(self) -> list[str]:
        return sorted(set(self._urls) | set(self._engines))

    def register(self, group: str, engine: Engine) -> None:
        """Bind ``group`` to an existing engine."""

        self._engines[group] = engine

    def engine(self, group: str) -> Engine:
        if group in self._engines:
            return self._engines[group]
        if group not in self._urls:
            raise InvalidGroupError(group, self.groups())
        engine = create_db_engine(self._urls[group], self.config)
        self._engines[group] = engine
        logger.debug("Created engine for connection group", extra={"group": group})
        return engine

    def dispose(self) -> None:
        for engine in self._engines.values():
            engine.dispose()
        self._engines.clear()


def bootstrap_database(config: BaseConfig | None = None) -> ConnectionGroups:
    """Build the connection groups and ensure the configured table exists.

    Used by the Flask integration and tests so engines and schema are set up
    the same way everywhere.
    """

    cfg = config or BaseConfig()
    connections = ConnectionGroups(cfg)
    if "database" in cfg.HANDLERS:
        options = cfg.handler_options("database")
        engine = connections.engine(options.get("group", "default"))
        init_database(engine, options.get("table", DEFAULT_TABLE))
    return connections
