"""
TMDBClient — Thin async wrapper around The Movie Database v3 REST API.

Consumes three upstream operations:
  GET /search/multi          — movies, TV shows and people in one list
  GET /{type}/{id}           — detail payload for a movie or TV show
  GET /{type}/{id}/videos    — trailers, teasers, clips, featurettes

The client does not interpret status codes: it returns every answer as an
UpstreamResponse so the caller decides what a 404 or a 429 means. Only
transport-level problems (timeouts, refused connections, a 200 whose body
is not JSON) are raised, as TransportFailure.

The bearer credential is passed in explicitly — see `from_settings()` for
the production wiring. Tests inject an `httpx.MockTransport` instead of
hitting the network.

API docs: https://developer.themoviedb.org/reference/intro/getting-started
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from cinefacade.core.config import Settings
from cinefacade.core.errors import TransportFailure
from cinefacade.models.catalog import UpstreamResponse

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"


class TMDBClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = TMDB_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TMDBClient":
        return cls(
            api_key=settings.tmdb_api_key,
            base_url=settings.tmdb_base_url,
            timeout=settings.tmdb_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    # ── Upstream operations ───────────────────────────────────────────────────

    async def search_multi(
        self,
        query: str,
        page: int,
        language: str,
        include_adult: bool,
    ) -> UpstreamResponse:
        return await self._get(
            "/search/multi",
            params={
                "query": query,
                "page": page,
                "language": language,
                "include_adult": "true" if include_adult else "false",
            },
        )

    async def get_details(self, media_type: str, content_id: int, language: str) -> UpstreamResponse:
        return await self._get(
            f"/{quote(media_type, safe='')}/{content_id}",
            params={"language": language},
        )

    async def get_videos(self, media_type: str, content_id: int) -> UpstreamResponse:
        return await self._get(f"/{quote(media_type, safe='')}/{content_id}/videos")

    # ── Internals ─────────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "accept": "application/json",
        }

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> UpstreamResponse:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(path, params=params, headers=self._headers())
            except httpx.HTTPError as exc:
                logger.error("TMDB request %s failed: %s", path, exc)
                raise TransportFailure(f"Upstream request failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning(
                "TMDB %s returned %s — %s",
                path,
                response.status_code,
                response.text[:200],
            )
            return UpstreamResponse(status_code=response.status_code, body=_decode_lenient(response))

        try:
            body = response.json()
        except ValueError as exc:
            logger.error("TMDB %s returned a non-JSON body: %s", path, response.text[:200])
            raise TransportFailure("Upstream returned a malformed response") from exc

        return UpstreamResponse(status_code=200, body=body)


def _decode_lenient(response: httpx.Response) -> Any:
    """Error bodies: JSON when TMDB sent JSON, the raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text or None
