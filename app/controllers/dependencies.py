"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import NoteRepositoryInterface
from app.database import get_session
from app.infrastructure.persistence.repositories_sqlalchemy import (
    SQLAlchemyNoteRepository,
)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_note_repository(session: SessionDep) -> NoteRepositoryInterface:
    """Build the note repository bound to the request-scoped session."""

    return SQLAlchemyNoteRepository(session)


NoteRepositoryDep = Annotated[NoteRepositoryInterface, Depends(get_note_repository)]


__all__ = ["get_note_repository", "SessionDep", "NoteRepositoryDep"]
