"""Stored setting overrides."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import Column, String, Text, UniqueConstraint
from sqlmodel import Field, SQLModel

DEFAULT_TABLE = "settings"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Setting(SQLModel, table=True):
    """One override of a config option, optionally scoped to a context.

    ``context`` is NULL for the global slot. SQL treats NULLs as distinct, so
    the unique constraint only guards contextual rows; the database handler
    keeps the global slot unique itself.
    """

    __tablename__: ClassVar[str] = DEFAULT_TABLE
    __table_args__ = (UniqueConstraint("class", "key", "context"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    class_: str = Field(sa_column=Column("class", String(255), nullable=False))
    key: str = Field(sa_column=Column("key", String(255), nullable=False))
    value: Optional[str] = Field(default=None, sa_column=Column("value", Text, nullable=True))
    type: str = Field(default="string", nullable=False, max_length=31)
    context: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
