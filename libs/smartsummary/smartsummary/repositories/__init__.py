"""PostgreSQL repository layer."""

from smartsummary.repositories.base import BaseRepository, DatabasePool
from smartsummary.repositories.note_repo import NoteRepository

__all__ = ["BaseRepository", "DatabasePool", "NoteRepository"]
