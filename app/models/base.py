"""Declarative base and shared column mixins for the SQLAlchemy models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now() -> datetime:
    """Return the current UTC time as a naive datetime for persistence."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


class CurrentTimestamps:
    """Mixin for entities whose creation and change times are set on save.

    The columns are written by the persistence layer while flushing; application
    code should treat both as read-only.
    """

    created_at = Column(DateTime, nullable=False, default=utc_now)
    changed_at = Column(DateTime, nullable=True)

    def mark_created(self, at: datetime) -> None:
        self.created_at = at

    def mark_changed(self, at: datetime) -> None:
        self.changed_at = at


__all__ = ["Base", "CurrentTimestamps", "utc_now"]
