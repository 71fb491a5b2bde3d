"""In-process handler keeping overrides in a dict."""

from __future__ import annotations

import copy
from typing import Any, Optional

from ...domain.handlers import Found, Lookup, LookupResult
from .base import BaseHandler, logger

Slot = tuple[str, str, Optional[str]]


class ArrayHandler(BaseHandler):
    """Volatile handler for tests and in-process caching.

    Forgotten slots are tombstoned so a later handler in the chain cannot
    hand back the value that was just deleted.
    """

    name = "array"

    def __init__(self, *, primary: bool = True):
        super().__init__(primary=primary)
        self._values: dict[Slot, Any] = {}
        self._forgotten: set[Slot] = set()

    def get(self, class_: str, key: str, context: Optional[str] = None) -> LookupResult:
        slot = (class_, key, context)
        if slot in self._forgotten:
            return Lookup.FORGOTTEN
        if slot not in self._values:
            return Lookup.NOT_FOUND
        return Found(copy.deepcopy(self._values[slot]))

    def _store(self, class_: str, key: str, value: Any, context: Optional[str]) -> None:
        slot = (class_, key, context)
        self._values[slot] = copy.deepcopy(value)
        self._forgotten.discard(slot)

    def _remove(self, class_: str, key: str, context: Optional[str]) -> None:
        slot = (class_, key, context)
        self._values.pop(slot, None)
        self._forgotten.add(slot)

    def _remove_all(self) -> None:
        logger.info("Flushing in-memory settings", extra={"count": len(self._values)})
        self._values.clear()
        self._forgotten.clear()
