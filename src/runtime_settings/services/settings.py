"""Settings façade: resolves ``Class.key`` names across handlers and defaults."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..config import BaseConfig
from ..config_provider import ConfigProvider, default_provider
from ..domain.handlers import Found, Lookup, LookupResult, SettingsHandler
from ..errors import InvalidHandlerError, InvalidNameError, InvalidStateError
from ..infra.database import ConnectionGroups
from ..infra.handlers import ArrayHandler, DatabaseHandler
from ..logging_config import get_logger
from ..models.setting import DEFAULT_TABLE

logger = get_logger("services.settings")


def parse_name(name: str) -> tuple[str, str]:
    """Split ``Class.key`` on its final dot.

    >>> parse_name("app.config.Example.siteName")
    ('app.config.Example', 'siteName')
    """

    class_name, dot, key = name.rpartition(".")
    if not dot or not class_name or not key:
        raise InvalidNameError(name)
    return class_name, key


class Settings:
    """Runtime overrides layered over configuration defaults.

    Reads ask the primary handler first, then the rest of the chain in
    order, and stop at the first handler that knows the slot. A contextual
    miss falls back to the global slot once before the config default is
    used. Writes only go to the primary handler.
    """

    def __init__(
        self,
        config: BaseConfig | None = None,
        *,
        provider: ConfigProvider | None = None,
        connections: ConnectionGroups | None = None,
    ):
        self.config = config or BaseConfig()
        self.provider = provider or default_provider
        self._connections = connections
        self._owns_connections = False
        self._handlers = self._build_handlers()
        self._write_handler = next(
            (handler for handler in reversed(self._handlers) if handler.has_primary()), None
        )
        self._read_order = self._handlers
        if self._write_handler is not None:
            self._read_order = [self._write_handler] + [
                handler for handler in self._handlers if handler is not self._write_handler
            ]

    # ------------------------------------------------------------------
    # Handler chain
    # ------------------------------------------------------------------

    def _connection_groups(self) -> ConnectionGroups:
        if self._connections is None:
            self._connections = ConnectionGroups(self.config)
            self._owns_connections = True
        return self._connections

    def _array_handler(self, options: dict[str, Any], primary: bool) -> SettingsHandler:
        return ArrayHandler(primary=primary)

    def _database_handler(self, options: dict[str, Any], primary: bool) -> SettingsHandler:
        return DatabaseHandler(
            self._connection_groups(),
            table=options.get("table", DEFAULT_TABLE),
            group=options.get("group", "default"),
            primary=primary,
        )

    def _build_handlers(self) -> list[SettingsHandler]:
        factories: dict[str, Callable[[dict[str, Any], bool], SettingsHandler]] = {
            "array": self._array_handler,
            "database": self._database_handler,
        }
        names = list(self.config.HANDLERS)
        for name in names:
            if name not in factories:
                raise InvalidHandlerError(name)

        options = [self.config.handler_options(name) for name in names]
        writeable = [index for index, opts in enumerate(options) if opts.get("writeable", True)]
        primary_index = writeable[-1] if writeable else None

        handlers = [
            factories[name](opts, index == primary_index)
            for index, (name, opts) in enumerate(zip(names, options))
        ]
        logger.debug(
            "Built settings handler chain",
            extra={"handlers": names, "primary": names[primary_index] if writeable else None},
        )
        return handlers

    @property
    def handlers(self) -> list[SettingsHandler]:
        return list(self._handlers)

    @property
    def write_handler(self) -> Optional[SettingsHandler]:
        return self._write_handler

    def _require_write_handler(self, operation: str) -> SettingsHandler:
        if self._write_handler is None:
            raise InvalidStateError(operation)
        return self._write_handler

    def _resolve(self, name: str) -> tuple[str, str]:
        class_name, key = parse_name(name)
        return self.provider.canonical_name(class_name), key

    def _lookup(self, class_name: str, key: str, context: Optional[str]) -> LookupResult:
        for handler in self._read_order:
            result = handler.get(class_name, key, context)
            if result is not Lookup.NOT_FOUND:
                return result
        return Lookup.NOT_FOUND

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, name: str, context: Optional[str] = None) -> Any:
        """Return the effective value of ``name`` for ``context``.

        A forgotten contextual slot still falls back to the global value;
        a forgotten global slot goes straight to the default.
        """

        class_name, key = self._resolve(name)
        result = self._lookup(class_name, key, context)
        if isinstance(result, Found):
            return result.value
        if context is not None:
            result = self._lookup(class_name, key, None)
            if isinstance(result, Found):
                return result.value
        return self.provider.read(class_name, key)

    def set(self, name: str, value: Any, context: Optional[str] = None) -> None:
        """Store an override for ``name`` on the primary handler."""

        class_name, key = self._resolve(name)
        self._require_write_handler("set").set(class_name, key, value, context)

    def forget(self, name: str, context: Optional[str] = None) -> None:
        """Remove the override for ``name`` so reads see the default again."""

        class_name, key = self._resolve(name)
        self._require_write_handler("forget").forget(class_name, key, context)

    def flush(self) -> None:
        """Remove every override held by the primary handler."""

        self._require_write_handler("flush").forget_all()

    def close(self) -> None:
        """Dispose of engines this façade created itself."""

        if self._owns_connections and self._connections is not None:
            self._connections.dispose()
            self._connections = None
            self._owns_connections = False
