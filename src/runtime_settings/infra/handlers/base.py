"""Shared behaviour for handler implementations."""

from __future__ import annotations

from typing import Any, Optional

from ...logging_config import get_logger

logger = get_logger("handlers")


class BaseHandler:
    """Carries the primary flag and drops writes on non-primary handlers.

    Subclasses implement ``_store``, ``_remove`` and ``_remove_all``.
    """

    name = "base"

    def __init__(self, *, primary: bool = True):
        self.primary = primary

    def has_primary(self) -> bool:
        return self.primary

    def _accepts_writes(self, operation: str) -> bool:
        if self.primary:
            return True
        logger.warning(
            "Ignoring write sent to non-primary handler",
            extra={"handler": self.name, "operation": operation},
        )
        return False

    def set(self, class_: str, key: str, value: Any, context: Optional[str] = None) -> None:
        if self._accepts_writes("set"):
            self._store(class_, key, value, context)

    def forget(self, class_: str, key: str, context: Optional[str] = None) -> None:
        if self._accepts_writes("forget"):
            self._remove(class_, key, context)

    def forget_all(self) -> None:
        if self._accepts_writes("forget_all"):
            self._remove_all()

    def _store(self, class_: str, key: str, value: Any, context: Optional[str]) -> None:
        raise NotImplementedError

    def _remove(self, class_: str, key: str, context: Optional[str]) -> None:
        raise NotImplementedError

    def _remove_all(self) -> None:
        raise NotImplementedError
