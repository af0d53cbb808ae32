"""Audio upload + transcription route."""

from __future__ import annotations

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import JSONResponse

from errors import error_response
from routes._deps import orchestrator
from routes.schemas import ErrorResponse, TranscriptionResponse

router = APIRouter(tags=["uploads"])


@router.post(
    "/upload",
    response_model=TranscriptionResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_audio(
    request: Request, audio: UploadFile | None = File(None)
) -> TranscriptionResponse | JSONResponse:
    try:
        outcome = await orchestrator(request).transcribe_upload(audio)
    finally:
        if audio is not None:
            await audio.close()

    if not outcome.ok:
        return error_response(outcome.status_code, str(outcome.error), outcome.details)
    return TranscriptionResponse(transcription=outcome.transcription or "")
