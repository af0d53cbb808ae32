"""Text summarization route (summary -> note -> notification)."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from errors import error_response
from routes._deps import orchestrator
from routes.schemas import ErrorResponse, SummarizeRequest, SummarizeResponse
from smartsummary.pipeline import SummaryRequest

router = APIRouter(tags=["summaries"])


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize(
    request: Request, payload: SummarizeRequest
) -> SummarizeResponse | JSONResponse:
    outcome = await orchestrator(request).summarize_text(
        SummaryRequest(
            text=payload.text,
            title=payload.title,
            email=payload.email,
            duration=payload.duration,
        )
    )
    if not outcome.ok:
        return error_response(outcome.status_code, str(outcome.error), outcome.details)
    return SummarizeResponse(summary=outcome.summary or "", message=str(outcome.message))
