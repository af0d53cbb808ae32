"""Note collection routes."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from errors import error_response
from routes._deps import service, to_response
from routes.schemas import (
    DeleteNoteRequest,
    ErrorResponse,
    MessageResponse,
    NoteResponse,
    PatchNoteRequest,
    UpdateNoteRequest,
)
from smartsummary.exceptions import NoteNotFoundError, StorageUnavailableError

router = APIRouter(prefix="/notes", tags=["notes"])

_NOT_FOUND = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _not_found() -> JSONResponse:
    return error_response(404, "Note not found")


@router.get("", response_model=list[NoteResponse], responses={500: {"model": ErrorResponse}})
async def list_notes(request: Request) -> list[NoteResponse] | JSONResponse:
    try:
        notes = await service(request).list_notes()
    except StorageUnavailableError as exc:
        return error_response(500, "Failed to fetch notes", exc.details)
    return [to_response(n) for n in notes]


@router.post("/update", response_model=NoteResponse, responses={400: {"model": ErrorResponse}, **_NOT_FOUND})
async def update_note_by_body(
    request: Request, payload: UpdateNoteRequest
) -> NoteResponse | JSONResponse:
    if not payload.id:
        return error_response(400, "Note ID is required")
    return await _update(request, payload.id, title=payload.title, markdown=payload.markdown)


@router.post("/delete", response_model=MessageResponse, responses={400: {"model": ErrorResponse}, **_NOT_FOUND})
async def delete_note_by_body(
    request: Request, payload: DeleteNoteRequest
) -> MessageResponse | JSONResponse:
    if not payload.id:
        return error_response(400, "Note ID is required")
    return await _delete(request, payload.id)


@router.get("/{note_id}", response_model=NoteResponse, responses=_NOT_FOUND)
async def get_note(request: Request, note_id: str) -> NoteResponse | JSONResponse:
    try:
        note = await service(request).get_note(note_id)
    except NoteNotFoundError:
        return _not_found()
    except StorageUnavailableError as exc:
        return error_response(500, "Failed to fetch note", exc.details)
    return to_response(note)


@router.patch("/{note_id}", response_model=NoteResponse, responses=_NOT_FOUND)
async def patch_note(
    request: Request, note_id: str, payload: PatchNoteRequest
) -> NoteResponse | JSONResponse:
    return await _update(request, note_id, title=payload.title, markdown=payload.markdown)


@router.delete("/{note_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_note(request: Request, note_id: str) -> MessageResponse | JSONResponse:
    return await _delete(request, note_id)


async def _update(
    request: Request, note_id: str, *, title: str | None, markdown: str | None
) -> NoteResponse | JSONResponse:
    try:
        note = await service(request).update_note(note_id, title=title, markdown=markdown)
    except NoteNotFoundError:
        return _not_found()
    except StorageUnavailableError as exc:
        return error_response(500, "Failed to update note", exc.details)
    return to_response(note)


async def _delete(request: Request, note_id: str) -> MessageResponse | JSONResponse:
    try:
        await service(request).delete_note(note_id)
    except NoteNotFoundError:
        return _not_found()
    except StorageUnavailableError as exc:
        return error_response(500, "Failed to delete note", exc.details)
    return MessageResponse(message="Note deleted successfully")
