"""SQLAlchemy model for notes."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import validates

from app.models.base import Base, CurrentTimestamps

MESSAGE_MAX_LENGTH = 256


class NoteValidationError(ValueError):
    """Raised when a note message is empty or too long."""


class Note(CurrentTimestamps, Base):
    __tablename__ = "notes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    message = Column(String(MESSAGE_MAX_LENGTH), nullable=False)

    def __init__(self, message: str) -> None:
        self.id = uuid.uuid4()
        self.message = message

    def update_message(self, message: str) -> None:
        self.message = message

    @validates("id")
    def _validate_id(self, _key: str, value: uuid.UUID) -> uuid.UUID:
        if self.id is not None and value != self.id:
            raise NoteValidationError("Note id cannot be changed")
        return value

    @validates("message")
    def _validate_message(self, _key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise NoteValidationError("Message cannot be empty")
        if len(value) > MESSAGE_MAX_LENGTH:
            raise NoteValidationError(
                f"Message cannot be longer than {MESSAGE_MAX_LENGTH} characters"
            )
        return value

    def __repr__(self) -> str:
        return f"<Note id={self.id} created_at={self.created_at}>"


__all__ = ["MESSAGE_MAX_LENGTH", "Note", "NoteValidationError"]
