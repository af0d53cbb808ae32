from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class TranscriptionResponse(BaseModel):
    transcription: str
    success: bool = True


class SummarizeRequest(BaseModel):
    text: str | None = None
    title: str | None = None
    email: str | None = None
    duration: str | None = None


class SummarizeResponse(BaseModel):
    success: bool = True
    summary: str
    message: str


class NoteResponse(BaseModel):
    id: str
    email: str
    title: str
    content: str
    summary: str
    markdown: str
    duration: str
    score: int
    created_at: datetime | None = None


class UpdateNoteRequest(BaseModel):
    id: str | None = None
    title: str | None = None
    markdown: str | None = None


class PatchNoteRequest(BaseModel):
    title: str | None = None
    markdown: str | None = None


class DeleteNoteRequest(BaseModel):
    id: str | None = None


class MessageResponse(BaseModel):
    message: str
