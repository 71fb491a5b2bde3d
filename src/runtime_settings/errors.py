"""Exceptions raised by the settings store.

Storage failures are not wrapped: whatever SQLAlchemy raises reaches the
caller unchanged.
"""

from __future__ import annotations

from typing import Any


class SettingsError(Exception):
    """Base exception for the settings store."""

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidNameError(SettingsError, ValueError):
    """Raised when a setting name is not of the form ``Class.key``."""

    def __init__(self, name: str):
        super().__init__(
            message=f"{name!r} must contain the config class and option key separated by a dot",
            error_code="INVALID_SETTING_NAME",
            details={"name": name},
        )


class InvalidGroupError(SettingsError, ValueError):
    """Raised when the database handler names an unknown connection group."""

    def __init__(self, group: str, known: list[str] | None = None):
        super().__init__(
            message=f"Database connection group {group!r} is not configured",
            error_code="INVALID_DATABASE_GROUP",
            details={"group": group, "known": sorted(known or [])},
        )


class InvalidHandlerError(SettingsError, ValueError):
    """Raised when the handler chain names an unknown handler."""

    def __init__(self, handler: str):
        super().__init__(
            message=f"Unknown settings handler {handler!r}",
            error_code="INVALID_SETTINGS_HANDLER",
            details={"handler": handler},
        )


class InvalidStateError(SettingsError, RuntimeError):
    """Raised when a write is attempted without a primary handler."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Cannot {operation} settings: no writeable handler is configured",
            error_code="NO_PRIMARY_HANDLER",
            details={"operation": operation},
        )


class CorruptDataError(SettingsError, ValueError):
    """Raised when a stored value cannot be decoded against its type tag."""

    def __init__(self, tag: str, reason: str):
        super().__init__(
            message=f"Stored setting of type {tag!r} is corrupt: {reason}",
            error_code="CORRUPT_SETTING",
            details={"type": tag, "reason": reason},
        )
