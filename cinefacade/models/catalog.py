"""
catalog.py — Pydantic models for the search and detail endpoints.

Response bodies are TMDB's own payloads and are passed through as plain
dicts, so only the inbound query shapes and the upstream envelope live here.
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_LANGUAGE = "en-US"
DEFAULT_MEDIA_TYPE = "movie"

_DIGITS = re.compile(r"\d+")
_TRUTHY = {"true", "1", "yes", "on"}


def normalize_adult(raw: Optional[str]) -> bool:
    """True only for an explicit true/1/yes/on; anything else (empty included) is False."""
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY


def normalize_page(raw: Optional[str]) -> int:
    """Return the page to request: *raw* when it is a positive integer, else 1."""
    if raw is None:
        return 1
    raw = raw.strip()
    if not _DIGITS.fullmatch(raw):
        return 1
    return max(1, int(raw))


class SearchQuery(BaseModel):
    query:         str  = ""
    page:          int  = Field(1, ge=1)
    language:      str  = DEFAULT_LANGUAGE
    include_adult: bool = False


class DetailQuery(BaseModel):
    content_id: int = Field(..., gt=0)
    media_type: str = DEFAULT_MEDIA_TYPE   # movie | tv, passed through as-is
    language:   str = DEFAULT_LANGUAGE


class UpstreamResponse(BaseModel):
    status_code: int
    body:        Any = None   # decoded JSON, or raw text when not JSON

    @property
    def ok(self) -> bool:
        return self.status_code == 200
