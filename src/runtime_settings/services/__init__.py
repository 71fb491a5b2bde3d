"""Service module exports."""

from .settings import Settings, parse_name

__all__ = ["Settings", "parse_name"]
