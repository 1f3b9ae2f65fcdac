"""Liveness endpoint."""

from fastapi import APIRouter

from assetcdn.core.clock import utcnow
from assetcdn.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=utcnow())
