"""Settings handler protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Union


@dataclass(frozen=True)
class Found:
    """A handler holds a value for the requested slot."""

    value: Any


class Lookup(Enum):
    """Lookup outcomes that carry no value."""

    NOT_FOUND = "not_found"
    FORGOTTEN = "forgotten"


LookupResult = Union[Found, Lookup]


class SettingsHandler(Protocol):
    """Backend that stores overrides for ``(class, key, context)`` slots."""

    def get(self, class_: str, key: str, context: Optional[str] = None) -> LookupResult:
        """Look up a slot.

        ``Lookup.FORGOTTEN`` means the slot was deleted and neither later
        handlers nor defaults may supply its value.
        """
        ...

    def set(self, class_: str, key: str, value: Any, context: Optional[str] = None) -> None:
        """Store a value for a slot."""
        ...

    def forget(self, class_: str, key: str, context: Optional[str] = None) -> None:
        """Remove the value stored for a slot."""
        ...

    def forget_all(self) -> None:
        """Remove every stored value."""
        ...

    def has_primary(self) -> bool:
        """Return True for the one handler in a chain that accepts writes."""
        ...
