"""Note controller offering CRUD operations over the note repository."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError

from app.controllers.dependencies import NoteRepositoryDep
from app.models.note import Note
from app.views import (
    ErrorResponse,
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def _note_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Note not found",
    )


@router.get("", response_model=list[NoteResponse])
async def list_notes(repository: NoteRepositoryDep) -> list[NoteResponse]:
    notes = await repository.list_all()
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
)
async def get_note(note_id: UUID, repository: NoteRepositoryDep) -> NoteResponse:
    note = await repository.get_by_id(note_id)
    if note is None:
        raise _note_not_found()
    return NoteResponse.model_validate(note)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
)
async def create_note(
    payload: NoteCreateRequest,
    repository: NoteRepositoryDep,
    response: Response,
) -> NoteResponse:
    note = Note(payload.message)

    try:
        stored = await repository.insert(note)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not create note",
        ) from exc

    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not create note",
        )

    logger.info("Created note %s", stored.id)
    response.headers["Location"] = f"{router.prefix}/{stored.id}"
    return NoteResponse.model_validate(stored)


@router.put(
    "",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
)
async def update_note(
    payload: NoteUpdateRequest,
    repository: NoteRepositoryDep,
) -> NoteResponse:
    note = await repository.get_by_id(payload.id)
    if note is None:
        raise _note_not_found()

    note.update_message(payload.message)
    await repository.save_changes()

    note = await repository.get_by_id(payload.id)
    if note is None:
        raise _note_not_found()

    logger.info("Updated note %s", note.id)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
async def delete_note(note_id: UUID, repository: NoteRepositoryDep) -> Response:
    note = await repository.get_by_id(note_id)
    if note is None:
        raise _note_not_found()

    await repository.delete(note)
    logger.info("Deleted note %s", note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
