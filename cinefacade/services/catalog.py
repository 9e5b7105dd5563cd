"""
catalog.py — Search passthrough and detail + trailer composition.

HOW A DETAIL REQUEST IS COMPOSED
────────────────────────────────
1. The detail call and the videos call are fired together (asyncio.gather);
   the videos call does not depend on the detail payload.
2. The detail outcome is inspected first. A transport failure or any
   non-200 status ends the request with that error — whatever the videos
   call returned is discarded.
3. Videos entries with type "Trailer" hosted on "YouTube" are reduced to
   their keys, in upstream order (duplicates kept).
4. The keys are attached to the detail payload under "trailers".

If the videos call itself fails, TRAILER_FAILURE_MODE decides:
  degrade — log it and answer with trailers=[]
  fail    — answer with the videos call's error instead of the detail
"""

import asyncio
import logging
from typing import Any, Iterable

from cinefacade.core.errors import (
    CatalogError,
    TrailerFetchFailure,
    TransportFailure,
    upstream_error,
)
from cinefacade.models.catalog import DetailQuery, SearchQuery, UpstreamResponse
from cinefacade.services.tmdb_client import TMDBClient

logger = logging.getLogger(__name__)

TRAILER_TYPE = "Trailer"
TRAILER_SITE = "YouTube"


def extract_trailer_keys(videos: Iterable[Any]) -> list[str]:
    """Keys of YouTube trailers, in the order TMDB listed them."""
    keys = []
    for video in videos:
        if not isinstance(video, dict):
            continue
        if video.get("type") == TRAILER_TYPE and video.get("site") == TRAILER_SITE and "key" in video:
            keys.append(video["key"])
    return keys


class CatalogService:
    def __init__(self, client: TMDBClient, trailer_failure_mode: str = "degrade") -> None:
        self.client = client
        self.trailer_failure_mode = trailer_failure_mode

    async def search(self, q: SearchQuery) -> dict[str, Any]:
        """Forward a multi search to TMDB and return its page untouched."""
        response = await self.client.search_multi(
            query=q.query,
            page=q.page,
            language=q.language,
            include_adult=q.include_adult,
        )
        if not response.ok:
            raise upstream_error(response.status_code, response.body)
        return response.body

    async def details(self, q: DetailQuery) -> dict[str, Any]:
        """Detail payload for one movie/TV show plus its YouTube trailer keys."""
        detail, videos = await asyncio.gather(
            self.client.get_details(q.media_type, q.content_id, q.language),
            self.client.get_videos(q.media_type, q.content_id),
            return_exceptions=True,
        )

        if isinstance(detail, BaseException):
            raise detail
        if not detail.ok:
            raise upstream_error(detail.status_code, detail.body)
        if not isinstance(detail.body, dict):
            raise TransportFailure("Upstream returned a malformed response")

        result = dict(detail.body)
        result["trailers"] = self._trailers_from(videos, q)
        return result

    def _trailers_from(self, videos: Any, q: DetailQuery) -> list[str]:
        failure = _trailer_failure(videos)
        if failure is None:
            return extract_trailer_keys(videos.body.get("results") or [])

        if self.trailer_failure_mode == "fail":
            raise failure

        logger.warning(
            "Trailer lookup for %s/%s failed (%s) — returning no trailers",
            q.media_type,
            q.content_id,
            failure.status_code,
        )
        return []


def _trailer_failure(videos: Any) -> TrailerFetchFailure | None:
    """Map a gathered videos outcome to a TrailerFetchFailure, or None on success."""
    if isinstance(videos, CatalogError):
        return TrailerFetchFailure(videos.status_code, videos.detail)
    if isinstance(videos, BaseException):
        # anything other than a CatalogError is a bug, not a trailer outage
        raise videos
    if not isinstance(videos, UpstreamResponse):
        return TrailerFetchFailure(500, "Upstream returned a malformed response")
    if not videos.ok:
        return TrailerFetchFailure(videos.status_code, videos.body)
    if not isinstance(videos.body, dict):
        return TrailerFetchFailure(500, "Upstream returned a malformed response")
    return None
