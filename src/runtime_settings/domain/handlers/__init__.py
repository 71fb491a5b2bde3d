"""Handler protocol definitions for domain layer."""

from .protocol import Found, Lookup, LookupResult, SettingsHandler

__all__ = ["Found", "Lookup", "LookupResult", "SettingsHandler"]
