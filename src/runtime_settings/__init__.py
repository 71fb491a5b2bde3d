"""Runtime settings layered over static configuration defaults."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .config_provider import ConfigProvider, default_provider, register
from .errors import (
    CorruptDataError,
    InvalidGroupError,
    InvalidHandlerError,
    InvalidNameError,
    InvalidStateError,
    SettingsError,
)
from .extensions import get_settings, init_settings, reset_settings
from .helpers import setting
from .services.settings import Settings

__all__ = [
    "BaseConfig",
    "ConfigProvider",
    "CorruptDataError",
    "InvalidGroupError",
    "InvalidHandlerError",
    "InvalidNameError",
    "InvalidStateError",
    "Settings",
    "SettingsError",
    "TestConfig",
    "default_provider",
    "get_settings",
    "init_settings",
    "register",
    "reset_settings",
    "setting",
]
