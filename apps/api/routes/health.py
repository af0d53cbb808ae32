"""Health check routes."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from errors import error_response
from routes._deps import pool
from smartsummary.exceptions import StorageUnavailableError
from smartsummary.repositories import BaseRepository

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/db", response_model=None)
async def db_health(request: Request) -> dict | JSONResponse:
    repo = BaseRepository(pool(request))
    try:
        async with repo.connection() as conn:
            await conn.execute("SELECT 1")
    except StorageUnavailableError as exc:
        return error_response(503, "Database unavailable", exc.details)
    return {"status": "ok", "database": "ok"}
