"""
Health check endpoint.

Used by:
  - Docker HEALTHCHECK instruction
  - Load balancers / orchestrators
  - Front-end to check API connectivity

Never rate limited and never calls TMDB, so it stays cheap to poll.
"upstream" tells callers whether a TMDB credential is configured —
"API up but every search will 401" is worth distinguishing.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from cinefacade.core.config import settings

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str  # Always "ok" if the API process is alive
    version: str
    upstream: str  # "configured" | "unconfigured"
    environment: str


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        upstream="configured" if settings.tmdb_api_key else "unconfigured",
        environment=settings.environment,
    )
