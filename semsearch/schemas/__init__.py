from __future__ import annotations

from .common import ErrorResponse
from .embedding import EmbeddingCreate, EmbeddingCreateResponse
from .health import DependencyHealth, HealthCheckResponse
from .search import SearchHit, SearchQuery, SearchResponse

__all__ = [
    # common
    "ErrorResponse",
    # health
    "DependencyHealth",
    "HealthCheckResponse",
    # embedding
    "EmbeddingCreate",
    "EmbeddingCreateResponse",
    # search
    "SearchHit",
    "SearchQuery",
    "SearchResponse",
]
