"""
Readiness probe.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_database
from database.session import Database

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(database: Database = Depends(get_database)) -> JSONResponse:
    if await database.ping():
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "ok", "database": "ok"},
        )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "degraded", "database": "unavailable"},
    )
