"""Handler persisting overrides in a relational table."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.sql.elements import ColumnElement

from ... import codec
from ...domain.handlers import Found, Lookup, LookupResult
from ...errors import InvalidGroupError
from ...models.setting import DEFAULT_TABLE, utcnow
from ..database import ConnectionGroups, settings_table
from .base import BaseHandler, logger


class DatabaseHandler(BaseHandler):
    """Stores one typed row per ``(class, key, context)`` slot.

    Values go through :mod:`runtime_settings.codec`, so the row keeps the
    original Python type in its ``type`` column. Deleted rows are simply
    gone; this handler never reports a slot as forgotten.
    """

    name = "database"

    def __init__(
        self,
        connections: ConnectionGroups,
        *,
        table: str = DEFAULT_TABLE,
        group: str = "default",
        primary: bool = True,
    ):
        super().__init__(primary=primary)
        if group not in connections:
            raise InvalidGroupError(group, connections.groups())
        self.group = group
        self.engine = connections.engine(group)
        self.table = settings_table(table)

    def _slot(self, class_: str, key: str, context: Optional[str]) -> ColumnElement[bool]:
        columns = self.table.c
        # "= NULL" never matches, the global slot needs IS NULL.
        if context is None:
            context_clause = columns["context"].is_(None)
        else:
            context_clause = columns["context"] == context
        return and_(columns["class"] == class_, columns["key"] == key, context_clause)

    def get(self, class_: str, key: str, context: Optional[str] = None) -> LookupResult:
        statement = select(self.table.c["value"], self.table.c["type"]).where(
            self._slot(class_, key, context)
        )
        with self.engine.connect() as connection:
            row = connection.execute(statement).first()
        if row is None:
            return Lookup.NOT_FOUND
        value, tag = row
        return Found(codec.decode(value, tag))

    def _store(self, class_: str, key: str, value: Any, context: Optional[str]) -> None:
        serialized, tag = codec.encode(value)
        now = utcnow()
        slot = self._slot(class_, key, context)
        with self.engine.begin() as connection:
            existing = connection.execute(select(self.table.c["id"]).where(slot)).first()
            if existing is not None:
                connection.execute(
                    update(self.table)
                    .where(self.table.c["id"] == existing.id)
                    .values(value=serialized, type=tag, updated_at=now)
                )
            else:
                connection.execute(
                    insert(self.table).values(
                        {
                            "class": class_,
                            "key": key,
                            "value": serialized,
                            "type": tag,
                            "context": context,
                            "created_at": now,
                            "updated_at": now,
                        }
                    )
                )
        logger.debug(
            "Stored setting",
            extra={
                "setting_class": class_,
                "setting_key": key,
                "setting_context": context,
                "setting_type": tag,
                "inserted": existing is None,
            },
        )

    def _remove(self, class_: str, key: str, context: Optional[str]) -> None:
        with self.engine.begin() as connection:
            result = connection.execute(delete(self.table).where(self._slot(class_, key, context)))
        logger.debug(
            "Forgot setting",
            extra={"setting_class": class_, "setting_key": key, "rows": result.rowcount},
        )

    def _remove_all(self) -> None:
        with self.engine.begin() as connection:
            result = connection.execute(delete(self.table))
        logger.info("Flushed settings table", extra={"table": self.table.name, "rows": result.rowcount})
