"""
rate_limit.py — Global rate limiter instance.

Uses slowapi (a Starlette-compatible wrapper around the `limits` library).
Requests are keyed by client IP address; every decorated route gets its
own bucket, so /search and /details are limited independently.

Usage in routes:
    from fastapi import Request
    from cinefacade.core.rate_limit import limiter

    @router.get("/some-endpoint")
    @limiter.limit(settings.search_rate_limit, error_message="...")
    async def my_endpoint(request: Request):
        ...

Wired into the app in main.py:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

Counters live in RATE_LIMIT_STORAGE_URI. The memory and redis storages both
increment-then-compare atomically, so two requests racing for the last
token in a window never both get through.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from cinefacade.core.config import settings

SEARCH_LIMIT_MESSAGE = "Rate limiting how fast you can trigger search"
DETAIL_LIMIT_MESSAGE = "Rate limiting how fast you can trigger detail search"

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    strategy=settings.rate_limit_strategy,
)
