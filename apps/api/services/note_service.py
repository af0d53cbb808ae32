"""Note CRUD backed by PostgreSQL."""

from __future__ import annotations

import logging

from psycopg_pool import AsyncConnectionPool

from smartsummary.config import Settings
from smartsummary.exceptions import NoteNotFoundError
from smartsummary.models.note import Note
from smartsummary.repositories import NoteRepository

logger = logging.getLogger(__name__)


class NoteService:
    def __init__(self, settings: Settings, pool: AsyncConnectionPool):
        self.settings = settings
        self.repo = NoteRepository(pool)

    async def list_notes(self) -> list[Note]:
        return await self.repo.list_all()

    async def get_note(self, note_id: str) -> Note:
        note = await self.repo.get(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    async def update_note(
        self,
        note_id: str,
        *,
        title: str | None = None,
        markdown: str | None = None,
    ) -> Note:
        note = await self.repo.update(note_id, title=title, markdown=markdown)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    async def delete_note(self, note_id: str) -> None:
        removed = await self.repo.delete(note_id)
        if not removed:
            raise NoteNotFoundError(note_id)
