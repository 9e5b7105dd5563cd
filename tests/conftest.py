"""
pytest configuration and shared fixtures for the CineFacade API tests.

Key concern: tests must never reach the real TMDB API. We achieve this by:
  1. Overriding the get_catalog dependency with a CatalogService whose
     TMDBClient talks to an httpx.MockTransport (FakeTMDB below).
  2. Pinning small, known rate limits via env vars BEFORE the app is
     imported, and resetting the limiter storage before every test.
"""

import os

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TMDB_API_KEY", "test-token")
os.environ["SEARCH_RATE_LIMIT"] = "5/minute"
os.environ["DETAIL_RATE_LIMIT"] = "5/minute"
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"


class FakeTMDB:
    """
    Stand-in for api.themoviedb.org, usable as an httpx.MockTransport handler.

    Register answers per path (without the /3 prefix):
        fake.reply("/movie/550", 200, {...})
        fake.fail("/movie/550/videos", httpx.ConnectError)
    Unregistered paths answer 404 the way TMDB does.
    """

    def __init__(self):
        self._routes = {}
        self.requests: list[httpx.Request] = []

    def reply(self, path, status=200, json=None, text=None):
        self._routes[path] = ("reply", status, json, text)

    def fail(self, path, exc_cls=httpx.ConnectError):
        self._routes[path] = ("fail", exc_cls, None, None)

    def paths(self):
        return [r.url.path.removeprefix("/3") for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/3")
        route = self._routes.get(path)
        if route is None:
            return httpx.Response(
                404,
                json={"success": False, "status_code": 34, "status_message": "The resource you requested could not be found."},
            )
        kind, first, payload, text = route
        if kind == "fail":
            raise first("simulated network failure", request=request)
        if text is not None:
            return httpx.Response(first, text=text)
        return httpx.Response(first, json=payload)


@pytest.fixture()
def fake_tmdb():
    return FakeTMDB()


@pytest.fixture()
def trailer_failure_mode():
    """Override in a test module (or parametrize) to exercise `fail` mode."""
    return "degrade"


@pytest.fixture()
def catalog(fake_tmdb, trailer_failure_mode):
    from cinefacade.services.catalog import CatalogService
    from cinefacade.services.tmdb_client import TMDBClient

    tmdb = TMDBClient(api_key="test-token", transport=httpx.MockTransport(fake_tmdb))
    return CatalogService(tmdb, trailer_failure_mode=trailer_failure_mode)


@pytest.fixture(autouse=True)
def reset_limiter():
    """Clear in-memory rate-limit counters so tests are independent."""
    from cinefacade.core.rate_limit import limiter

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def app(catalog):
    """The FastAPI app with get_catalog pointed at the fake TMDB."""
    from cinefacade.main import app as fastapi_app
    from cinefacade.routes.catalog import get_catalog

    fastapi_app.dependency_overrides[get_catalog] = lambda: catalog
    yield fastapi_app
    fastapi_app.dependency_overrides.pop(get_catalog, None)


@pytest.fixture()
async def client(app):
    """
    HTTPX async test client wired to the FastAPI app with TMDB faked out.

    Usage:
        async def test_something(client, fake_tmdb):
            fake_tmdb.reply("/search/multi", 200, {...})
            response = await client.get("/search?query=x")
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def client_from(app):
    """
    Factory for clients that appear to come from a specific IP.

    Usage:
        async with client_from("198.51.100.4") as c:
            await c.get("/search?query=x")
    """

    def _make(ip: str) -> AsyncClient:
        return AsyncClient(transport=ASGITransport(app=app, client=(ip, 40000)), base_url="http://test")

    return _make
