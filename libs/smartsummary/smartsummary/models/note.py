"""Note model (durable result of one summarization run)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ANONYMOUS_EMAIL = "anonymous@example.com"
DEFAULT_TITLE = "Untitled Meeting"
DEFAULT_DURATION = "N/A"

MIN_SCORE = 80
MAX_SCORE = 100


def _dt_to_iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _dt_from_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


@dataclass
class Note:
    """A persisted meeting note.

    `id` and `created_at` are assigned by the repository on insert and never
    change afterwards. Only `title` and `markdown` are editable.
    """

    email: str
    title: str
    content: str
    summary: str
    markdown: str
    duration: str = DEFAULT_DURATION
    score: int = MIN_SCORE
    id: str | None = None
    created_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValueError(f"score must be an integer, got {self.score!r}")
        if not MIN_SCORE <= self.score <= MAX_SCORE:
            raise ValueError(f"score must be within [{MIN_SCORE}, {MAX_SCORE}], got {self.score}")

    @classmethod
    def draft(
        cls,
        *,
        content: str,
        summary: str,
        score: int,
        email: str | None = None,
        title: str | None = None,
        duration: str | None = None,
    ) -> "Note":
        """Build an unsaved note, filling in the defaults for missing metadata."""
        return cls(
            email=email or ANONYMOUS_EMAIL,
            title=title or DEFAULT_TITLE,
            content=content,
            summary=summary,
            markdown=summary,
            duration=duration or DEFAULT_DURATION,
            score=score,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "title": self.title,
            "content": self.content,
            "summary": self.summary,
            "markdown": self.markdown,
            "duration": self.duration,
            "score": self.score,
            "created_at": _dt_to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = _dt_from_iso(created_at)
        return cls(
            id=data.get("id"),
            email=str(data.get("email") or ANONYMOUS_EMAIL),
            title=str(data.get("title") or DEFAULT_TITLE),
            content=str(data.get("content") or ""),
            summary=str(data.get("summary") or ""),
            markdown=str(data.get("markdown") or ""),
            duration=str(data.get("duration") or DEFAULT_DURATION),
            score=int(data.get("score", MIN_SCORE)),
            created_at=created_at if isinstance(created_at, datetime) else None,
        )
