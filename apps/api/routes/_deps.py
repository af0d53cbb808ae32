from __future__ import annotations

from fastapi import HTTPException, Request

from services.note_service import NoteService
from smartsummary.config import Settings
from smartsummary.models.note import Note
from smartsummary.pipeline import PipelineOrchestrator
from smartsummary.providers import SummarizationEngine, TranscriptionEngine, build_engines
from smartsummary.services import ArtifactValidator, Notifier

from routes.schemas import NoteResponse


def settings(request: Request) -> Settings:
    value: Settings | None = getattr(request.app.state, "settings", None)
    if value is None:
        raise HTTPException(status_code=500, detail="settings not initialized")
    return value


def pool(request: Request):
    pool_obj = getattr(request.app.state, "db_pool", None)
    if pool_obj is None:
        raise HTTPException(status_code=500, detail="db pool not initialized")
    return pool_obj


def service(request: Request) -> NoteService:
    return NoteService(settings=settings(request), pool=pool(request))


def notifier(request: Request) -> Notifier:
    value: Notifier | None = getattr(request.app.state, "notifier", None)
    if value is None:
        raise HTTPException(status_code=500, detail="notifier not initialized")
    return value


def engines(request: Request) -> tuple[TranscriptionEngine, SummarizationEngine]:
    value = getattr(request.app.state, "engines", None)
    if value is None:
        value = build_engines(settings(request).engine)
        request.app.state.engines = value
    return value


def orchestrator(request: Request) -> PipelineOrchestrator:
    transcriber, summarizer = engines(request)
    return PipelineOrchestrator(
        validator=ArtifactValidator(settings(request)),
        transcriber=transcriber,
        summarizer=summarizer,
        notes=service(request).repo,
        notifier=notifier(request),
    )


def to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=str(note.id),
        email=note.email,
        title=note.title,
        content=note.content,
        summary=note.summary,
        markdown=note.markdown,
        duration=note.duration,
        score=int(note.score),
        created_at=note.created_at,
    )
