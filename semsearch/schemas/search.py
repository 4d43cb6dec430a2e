from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class SearchQuery(BaseModel):
    # Loosely typed: a bad limit falls back to the default and a
    # bad query is reported as invalid_input by the service.
    query: Any = None
    limit: Any = None


class SearchHit(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str | None = None
    similarity: float


class SearchResponse(BaseModel):
    query: str
    results: list[SearchHit]
    total_found: int
