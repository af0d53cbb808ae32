from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from smartsummary.models.note import Note
from smartsummary.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, email, title, content, summary, markdown, duration, score, created_at"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_note_id() -> str:
    return f"note_{uuid4().hex}"


class NoteRepository(BaseRepository):
    def __init__(self, pool: AsyncConnectionPool) -> None:
        super().__init__(pool)

    @staticmethod
    def _from_row(row: dict[str, object]) -> Note:
        raw_created_at = row.get("created_at")
        created_at = raw_created_at if isinstance(raw_created_at, datetime) else None
        return Note(
            id=str(row["id"]),
            email=str(row.get("email") or ""),
            title=str(row.get("title") or ""),
            content=str(row.get("content") or ""),
            summary=str(row.get("summary") or ""),
            markdown=str(row.get("markdown") or ""),
            duration=str(row.get("duration") or ""),
            score=int(row["score"]),  # type: ignore[arg-type]
            created_at=created_at,
        )

    async def create(self, note: Note) -> Note:
        note_id = note.id or new_note_id()
        created_at = note.created_at or _utcnow()
        async with self.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"""
                    INSERT INTO notes ({_COLUMNS})
                    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        note_id,
                        note.email,
                        note.title,
                        note.content,
                        note.summary,
                        note.markdown,
                        note.duration,
                        int(note.score),
                        created_at,
                    ),
                )
            await conn.commit()
        note.id = note_id
        note.created_at = created_at
        logger.info("note created (note_id=%s, score=%d)", note_id, note.score)
        return note

    async def get(self, note_id: str) -> Note | None:
        async with self.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"SELECT {_COLUMNS} FROM notes WHERE id = %s",
                    (note_id,),
                )
                row = await cur.fetchone()
        if row is None:
            return None
        return self._from_row(row)

    async def list_all(self) -> list[Note]:
        async with self.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"SELECT {_COLUMNS} FROM notes ORDER BY created_at DESC, id DESC"
                )
                rows = await cur.fetchall()
        return [self._from_row(r) for r in rows]

    async def update(
        self,
        note_id: str,
        *,
        title: str | None = None,
        markdown: str | None = None,
    ) -> Note | None:
        """Change title and/or rendered text; fields left as None are kept."""
        if title is None and markdown is None:
            return await self.get(note_id)
        async with self.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    UPDATE notes
                    SET title = COALESCE(%s, title),
                        markdown = COALESCE(%s, markdown)
                    WHERE id = %s
                    RETURNING {_COLUMNS}
                    """,
                    (title, markdown, note_id),
                )
                row = await cur.fetchone()
            await conn.commit()
        if row is None:
            return None
        return self._from_row(row)

    async def delete(self, note_id: str) -> bool:
        async with self.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("DELETE FROM notes WHERE id = %s", (note_id,))
                deleted = int(cur.rowcount or 0)
            await conn.commit()
        if deleted:
            logger.info("note deleted (note_id=%s)", note_id)
        return deleted > 0
