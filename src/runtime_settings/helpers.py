"""Shorthand access to the shared settings façade."""

from __future__ import annotations

from typing import Any, Optional

from .extensions import get_settings

_UNSET = object()


def setting(name: Optional[str] = None, value: Any = _UNSET, context: Optional[str] = None) -> Any:
    """Read or write a setting through the current façade.

    ``setting()`` returns the façade itself, ``setting("Example.siteName")``
    reads and ``setting("Example.siteName", "Foo")`` writes.
    """

    settings = get_settings()
    if name is None:
        return settings
    if value is _UNSET:
        return settings.get(name, context)
    settings.set(name, value, context)
    return None
