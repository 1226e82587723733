"""Pydantic schemas for Note resources."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.note import MESSAGE_MAX_LENGTH


class NoteCreateRequest(BaseModel):
    """Payload for creating a new Note."""

    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)


class NoteUpdateRequest(BaseModel):
    """Payload for replacing the message of an existing Note."""

    id: UUID
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)


class NoteResponse(BaseModel):
    """Serialized representation of a Note."""

    id: UUID
    message: str
    created_at: datetime
    changed_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


__all__ = ["NoteCreateRequest", "NoteResponse", "NoteUpdateRequest"]
