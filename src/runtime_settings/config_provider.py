"""Lookup of static configuration defaults.

A configuration class is a plain class whose public attributes are the
default values of its options::

    @register
    class Example:
        siteName = "Settings Test"

The provider hands out one shared instance per class, so ``write`` changes
what later ``read`` calls see until ``reset`` is called.
"""

from __future__ import annotations

import importlib
from typing import Any, Optional


def qualified_name(cls: type) -> str:
    """Return the dotted ``module.QualName`` a class is stored under."""

    return f"{cls.__module__}.{cls.__qualname__}"


class ConfigProvider:
    """Registry of configuration classes."""

    def __init__(self) -> None:
        self._classes: dict[str, type] = {}
        self._instances: dict[type, object] = {}

    def register(self, cls: type | None = None, *, alias: str | None = None):
        """Register a configuration class; usable bare or as ``@register(alias=...)``."""

        def _register(target: type) -> type:
            self._classes[target.__name__] = target
            self._classes[qualified_name(target)] = target
            if alias:
                self._classes[alias] = target
            return target

        if cls is None:
            return _register
        return _register(cls)

    def _locate(self, name: str) -> Optional[type]:
        if name in self._classes:
            return self._classes[name]
        module_name, _, attr = name.rpartition(".")
        if not module_name:
            return None
        try:
            module = importlib.import_module(module_name)
        except (ImportError, TypeError, ValueError):
            return None
        candidate = getattr(module, attr, None)
        if not isinstance(candidate, type):
            return None
        self._classes[name] = candidate
        return candidate

    def find(self, name: str) -> Optional[object]:
        """Return the shared instance of a configuration class, or None."""

        cls = self._locate(name)
        if cls is None:
            return None
        if cls not in self._instances:
            try:
                self._instances[cls] = cls()
            except TypeError:
                # Needs constructor arguments, so it cannot hold defaults.
                return None
        return self._instances[cls]

    def has_class(self, name: str) -> bool:
        return self.find(name) is not None

    def canonical_name(self, name: str) -> str:
        """Qualified name of a known class; unknown names are returned as-is."""

        cls = self._locate(name)
        return qualified_name(cls) if cls is not None else name

    def has_option(self, name: str, key: str) -> bool:
        if key.startswith("_"):
            return False
        instance = self.find(name)
        if instance is None or not hasattr(instance, key):
            return False
        return not callable(getattr(instance, key))

    def read(self, name: str, key: str, default: Any = None) -> Any:
        """Return the default declared for ``name.key``, or ``default``."""

        if not self.has_option(name, key):
            return default
        return getattr(self.find(name), key)

    def write(self, name: str, key: str, value: Any) -> None:
        instance = self.find(name)
        if instance is None:
            raise LookupError(f"Unknown configuration class {name!r}")
        setattr(instance, key, value)

    def reset(self) -> None:
        """Forget shared instances so defaults are read from the classes again."""

        self._instances.clear()


default_provider = ConfigProvider()
register = default_provider.register
