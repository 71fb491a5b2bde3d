"""SQLModel table exports."""

from .setting import DEFAULT_TABLE, Setting

__all__ = ["DEFAULT_TABLE", "Setting"]
