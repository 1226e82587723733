"""SQLAlchemy models for the MVC architecture."""

from .base import Base, CurrentTimestamps, utc_now
from .note import MESSAGE_MAX_LENGTH, Note, NoteValidationError

__all__ = [
    "Base",
    "CurrentTimestamps",
    "MESSAGE_MAX_LENGTH",
    "Note",
    "NoteValidationError",
    "utc_now",
]
