"""Concrete handler implementations."""

from .array import ArrayHandler
from .base import BaseHandler
from .database import DatabaseHandler

__all__ = ["ArrayHandler", "BaseHandler", "DatabaseHandler"]
