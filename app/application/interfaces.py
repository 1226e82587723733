from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from app.models.note import Note


class NoteRepositoryInterface(ABC):
    """Persistence contract for notes"""

    @abstractmethod
    async def list_all(self) -> List[Note]:
        ...

    @abstractmethod
    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        ...

    @abstractmethod
    async def insert(self, note: Note) -> Optional[Note]:
        ...

    @abstractmethod
    async def delete(self, note: Note) -> None:
        ...

    @abstractmethod
    async def save_changes(self) -> None:
        ...
