"""
catalog.py — Public search and detail endpoints.

Routes:
  GET /search?query=&language=&page=&adult=  — TMDB multi search passthrough
  GET /details/{id}?type=&language=           — detail payload + "trailers"

Both routes are rate limited per client IP, each against its own bucket
(SEARCH_RATE_LIMIT / DETAIL_RATE_LIMIT). The limiter check runs before the
route body, so a rejected request never reaches TMDB.

Errors come back as {"error": ...}:
  429 — local quota exhausted, or TMDB rate limited us (TMDB body inside)
  4xx/5xx from TMDB — propagated with TMDB's status and body
  500 — network failure talking to TMDB

Example:
  curl 'http://localhost:8000/search?query=guardians&language=fr-FR&page=1'
  curl 'http://localhost:8000/details/447365?type=movie&language=fr-FR'
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request

from cinefacade.core.config import settings
from cinefacade.core.rate_limit import DETAIL_LIMIT_MESSAGE, SEARCH_LIMIT_MESSAGE, limiter
from cinefacade.models.catalog import (
    DEFAULT_LANGUAGE,
    DEFAULT_MEDIA_TYPE,
    DetailQuery,
    SearchQuery,
    normalize_adult,
    normalize_page,
)
from cinefacade.services.catalog import CatalogService
from cinefacade.services.tmdb_client import TMDBClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


def get_catalog() -> CatalogService:
    """
    FastAPI dependency that yields the catalog service.

    Tests override this via app.dependency_overrides to point the
    TMDB client at an httpx.MockTransport.
    """
    return CatalogService(
        TMDBClient.from_settings(settings),
        trailer_failure_mode=settings.trailer_failure_mode,
    )


# ── GET /search ────────────────────────────────────────────────────────────────

@router.get("/search")
@limiter.limit(settings.search_rate_limit, error_message=SEARCH_LIMIT_MESSAGE)
async def search(
    request: Request,
    query: str = Query("", description="Search text for movies, TV shows and people"),
    page: Optional[str] = Query(None, description="Page number; anything but a positive integer means 1"),
    language: str = Query(DEFAULT_LANGUAGE, description="Result language, e.g. fr-FR"),
    adult: Optional[str] = Query(None, description="Include adult content: true/1/yes/on, anything else means false"),
    catalog: CatalogService = Depends(get_catalog),
):
    """
    Global search across movies and TV shows.

    Returns TMDB's page as-is: page, results, total_pages, total_results.
    """
    q = SearchQuery(
        query=query,
        page=normalize_page(page),
        language=language,
        include_adult=normalize_adult(adult),
    )
    logger.debug("search query=%r page=%s language=%s adult=%s", q.query, q.page, q.language, q.include_adult)
    return await catalog.search(q)


# ── GET /details/{id} ──────────────────────────────────────────────────────────

@router.get("/details/{content_id}")
@limiter.limit(settings.detail_rate_limit, error_message=DETAIL_LIMIT_MESSAGE)
async def details(
    request: Request,
    content_id: int = Path(..., gt=0, description="Movie/TV id from a search result"),
    type: str = Query(DEFAULT_MEDIA_TYPE, description="media_type from the search result: movie | tv"),
    language: str = Query(DEFAULT_LANGUAGE, description="Result language, e.g. fr-FR"),
    catalog: CatalogService = Depends(get_catalog),
):
    """
    Movie/TV detail plus trailers.

    `trailers` holds YouTube keys (https://www.youtube.com/watch?v={key}),
    empty when none exist.
    """
    q = DetailQuery(content_id=content_id, media_type=type, language=language)
    return await catalog.details(q)
