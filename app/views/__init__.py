"""Pydantic schemas used as views in the MVC architecture."""

from .common import ErrorResponse
from .notes import NoteCreateRequest, NoteResponse, NoteUpdateRequest

__all__ = [
    "ErrorResponse",
    "NoteCreateRequest",
    "NoteResponse",
    "NoteUpdateRequest",
]
