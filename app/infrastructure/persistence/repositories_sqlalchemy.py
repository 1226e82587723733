import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import NoteRepositoryInterface
from app.models.note import Note

logger = logging.getLogger(__name__)


class SQLAlchemyNoteRepository(NoteRepositoryInterface):
    """SQLAlchemy implementation of the Note repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Note]:
        result = await self.session.execute(
            select(Note).order_by(Note.created_at, Note.id)
        )
        return list(result.scalars().all())

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        result = await self.session.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def insert(self, note: Note) -> Optional[Note]:
        self.session.add(note)
        await self.save_changes()
        return await self.get_by_id(note.id)

    async def delete(self, note: Note) -> None:
        await self.session.delete(note)
        await self.save_changes()

    async def save_changes(self) -> None:
        """Commit pending changes, rolling back the session when the write fails.

        A failed flush already rolls back the transaction and expires every
        persistent instance, so modified notes must be reloaded afterwards;
        notes that were being inserted keep their in-memory values.
        """

        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Failed to save note changes")
            raise
