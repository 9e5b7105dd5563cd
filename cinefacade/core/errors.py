"""
errors.py — Failure kinds raised while talking to TMDB.

Every error carries the HTTP status and the payload to put under the
response's "error" key. main.py registers `catalog_error_handler` so
routes can simply raise, and `validation_error_handler` so malformed
query/path parameters answer in the same {"error": ...} shape.

Local quota rejections are not modelled here: slowapi raises its own
RateLimitExceeded (429) before the route body runs.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class CatalogError(Exception):
    """Base class — status code plus the detail sent back to the caller."""

    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class UpstreamError(CatalogError):
    """TMDB answered a primary (search/detail) call with a non-200 status."""


class UpstreamRateLimited(UpstreamError):
    """TMDB answered 429. Body is passed through untouched."""

    def __init__(self, detail: Any) -> None:
        super().__init__(429, detail)


class TransportFailure(CatalogError):
    """Timeout, connection error or an undecodable body. Always 500."""

    def __init__(self, detail: Any) -> None:
        super().__init__(500, detail)


class TrailerFetchFailure(CatalogError):
    """The supplementary videos call failed (only raised in `fail` mode)."""


def upstream_error(status_code: int, body: Any) -> UpstreamError:
    if status_code == 429:
        return UpstreamRateLimited(body)
    return UpstreamError(status_code, body)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 with "<param>: <reason>" messages joined, e.g. "content_id: Input should be greater than 0"."""
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("path", "query")]
        messages.append(f"{'.'.join(loc)}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(status_code=422, content={"error": "; ".join(messages)})
