"""Capture-to-note pipeline orchestrator.

One request walks a linear state machine:

    received -> validated -> transcribing        (audio upload entry point)
    received -> summarizing -> persisted -> notified   (text entry point)

with `failed` reachable from every non-terminal state. Each stage reports a
tagged `PipelineOutcome` instead of letting exceptions escape, so callers get a
well-formed result on every path.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol
from uuid import uuid4

from smartsummary.error_codes import ErrorCode
from smartsummary.exceptions import (
    ExternalProcessFailure,
    InvalidArtifactError,
    SmartSummaryError,
    StorageUnavailableError,
)
from smartsummary.models.artifact import UploadedArtifact
from smartsummary.models.note import MAX_SCORE, MIN_SCORE, Note
from smartsummary.services.artifact_validator import ArtifactValidator, AudioUpload

logger = logging.getLogger(__name__)

SUMMARY_SAVED_MESSAGE = "Summary generated and saved successfully"


class PipelineState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    TRANSCRIBING = "transcribing"
    SUMMARIZING = "summarizing"
    PERSISTED = "persisted"
    NOTIFIED = "notified"
    FAILED = "failed"


_TERMINAL = {PipelineState.NOTIFIED, PipelineState.FAILED}


class Transcriber(Protocol):
    async def transcribe(self, audio_path: str) -> str: ...


class Summarizer(Protocol):
    async def summarize(self, text: str) -> str: ...


class NoteWriter(Protocol):
    async def create(self, note: Note) -> Note: ...


class NotificationSink(Protocol):
    def notify(self, recipient_hint: str | None) -> None: ...


@dataclass(frozen=True)
class SummaryRequest:
    text: str | None
    title: str | None = None
    email: str | None = None
    duration: str | None = None


@dataclass
class PipelineRun:
    """Transition log for one request (never persisted)."""

    id: str = field(default_factory=lambda: f"run_{uuid4().hex[:12]}")
    state: PipelineState = PipelineState.RECEIVED
    history: list[tuple[PipelineState, datetime]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.history.append((self.state, datetime.now(tz=timezone.utc)))

    def advance(self, state: PipelineState) -> None:
        if self.state in _TERMINAL:
            raise RuntimeError(f"run {self.id} already finished ({self.state.value})")
        self.state = state
        self.history.append((state, datetime.now(tz=timezone.utc)))
        logger.info("pipeline transition (run_id=%s, state=%s)", self.id, state.value)

    @property
    def states(self) -> list[PipelineState]:
        return [s for s, _ in self.history]


@dataclass(frozen=True)
class PipelineOutcome:
    ok: bool
    state: PipelineState
    transcription: str | None = None
    summary: str | None = None
    note: Note | None = None
    error_code: ErrorCode | None = None
    error: str | None = None
    details: str | None = None
    status_code: int = 200

    @property
    def message(self) -> str | None:
        return SUMMARY_SAVED_MESSAGE if self.note is not None else None


def draw_score() -> int:
    return random.randint(MIN_SCORE, MAX_SCORE)


class PipelineOrchestrator:
    def __init__(
        self,
        *,
        validator: ArtifactValidator,
        transcriber: Transcriber,
        summarizer: Summarizer,
        notes: NoteWriter,
        notifier: NotificationSink,
    ) -> None:
        self.validator = validator
        self.transcriber = transcriber
        self.summarizer = summarizer
        self.notes = notes
        self.notifier = notifier

    @staticmethod
    def _fail(
        run: PipelineRun,
        error_code: ErrorCode,
        error: str,
        *,
        details: str | None = None,
        status_code: int = 500,
    ) -> PipelineOutcome:
        run.advance(PipelineState.FAILED)
        logger.warning(
            "pipeline failed (run_id=%s, error_code=%s): %s", run.id, error_code.value, error
        )
        return PipelineOutcome(
            ok=False,
            state=PipelineState.FAILED,
            error_code=error_code,
            error=error,
            details=details,
            status_code=status_code,
        )

    @classmethod
    def _unexpected(cls, run: PipelineRun, exc: BaseException) -> PipelineOutcome:
        logger.exception("unexpected pipeline error (run_id=%s, state=%s)", run.id, run.state.value)
        return cls._fail(run, ErrorCode.UNKNOWN, "Something went wrong", details=str(exc))

    async def transcribe_upload(
        self, upload: AudioUpload | None, *, run: PipelineRun | None = None
    ) -> PipelineOutcome:
        run = run or PipelineRun()
        try:
            artifact = await self.validator.ingest(upload)
        except InvalidArtifactError as exc:
            return self._fail(
                run,
                ErrorCode.INVALID_ARTIFACT,
                exc.message,
                details=exc.details,
                status_code=exc.status_code,
            )
        except Exception as exc:
            return self._unexpected(run, exc)
        run.advance(PipelineState.VALIDATED)
        return await self._transcribe(run, artifact)

    async def _transcribe(self, run: PipelineRun, artifact: UploadedArtifact) -> PipelineOutcome:
        run.advance(PipelineState.TRANSCRIBING)
        logger.info("Processing file: %s", artifact.path)
        try:
            transcript = await self.transcriber.transcribe(artifact.path)
        except ExternalProcessFailure as exc:
            return self._fail(
                run, ErrorCode.TRANSCRIPTION_FAILED, "Transcription failed", details=exc.stderr
            )
        except Exception as exc:
            return self._unexpected(run, exc)
        finally:
            self.validator.discard(artifact)
        return PipelineOutcome(ok=True, state=run.state, transcription=transcript)

    async def summarize_text(
        self, request: SummaryRequest, *, run: PipelineRun | None = None
    ) -> PipelineOutcome:
        run = run or PipelineRun()
        text = request.text or ""
        if not text.strip():
            return self._fail(
                run, ErrorCode.INVALID_INPUT, "No text provided", status_code=400
            )

        run.advance(PipelineState.SUMMARIZING)
        try:
            summary = await self.summarizer.summarize(text)
        except ExternalProcessFailure as exc:
            return self._fail(
                run, ErrorCode.SUMMARIZATION_FAILED, "Error processing summary", details=exc.stderr
            )
        except Exception as exc:
            return self._unexpected(run, exc)

        draft = Note.draft(
            content=text,
            summary=summary,
            score=draw_score(),
            email=request.email,
            title=request.title,
            duration=request.duration,
        )
        try:
            note = await self.notes.create(draft)
        except StorageUnavailableError as exc:
            return self._fail(
                run,
                ErrorCode.STORAGE_UNAVAILABLE,
                "Failed to save summary to database",
                details=exc.details or exc.message,
            )
        except SmartSummaryError as exc:
            return self._fail(
                run,
                ErrorCode.STORAGE_UNAVAILABLE,
                "Failed to save summary to database",
                details=exc.message,
            )
        except Exception as exc:
            return self._unexpected(run, exc)
        run.advance(PipelineState.PERSISTED)

        # The caller's result is fixed from here on; delivery happens in the background.
        try:
            self.notifier.notify(note.email)
        except Exception:
            logger.exception("failed to schedule notification (run_id=%s)", run.id)
        run.advance(PipelineState.NOTIFIED)

        return PipelineOutcome(ok=True, state=run.state, summary=summary, note=note)
