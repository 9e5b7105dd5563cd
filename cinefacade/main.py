"""
CineFacade API — Application entry point.

Bootstraps FastAPI, wires up rate limiting, error handlers and
middleware, and registers the route groups.

Extension points:
  - Add new route groups with app.include_router() below
  - Add new middleware in the middleware block
  - Change startup behaviour in the lifespan context manager

Run locally:
  uvicorn cinefacade.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cinefacade.core.config import settings
from cinefacade.core.errors import CatalogError, catalog_error_handler, validation_error_handler
from cinefacade.core.rate_limit import limiter
from cinefacade.routes.catalog import router as catalog_router
from cinefacade.routes.health import router as health_router

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting CineFacade API (env: %s, search limit: %s, detail limit: %s, storage: %s)",
        settings.environment,
        settings.search_rate_limit,
        settings.detail_rate_limit,
        settings.rate_limit_storage_uri.split("@")[-1],
    )
    if not settings.tmdb_api_key:
        logger.warning("TMDB_API_KEY not set — /search and /details will fail upstream")
    yield
    logger.info("Shutting down CineFacade API")


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="CineFacade API",
    description="Movie and TV search backed by TMDB, with YouTube trailer lookup.",
    version="0.1.0",
    lifespan=lifespan,
    # Disable docs in production to reduce attack surface
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
# Attach the limiter to app state so slowapi can find it.
# Routes opt-in with @limiter.limit(...) + request: Request parameter.
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ─── Errors ────────────────────────────────────────────────────────────────────
# Upstream / transport failures → {"error": ...} with the matching status.
# Invalid query/path parameters → 422 {"error": ...} instead of FastAPI's {"detail": [...]}.
app.add_exception_handler(CatalogError, catalog_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# ─── Middleware ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(catalog_router)


@app.get("/", tags=["root"])
async def root():
    """API root — basic metadata."""
    return {
        "name": "CineFacade API",
        "version": "0.1.0",
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }
