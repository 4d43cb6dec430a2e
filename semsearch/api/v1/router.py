from __future__ import annotations

from fastapi import APIRouter

from semsearch.api.v1 import embeddings, health, search

api_v1_router = APIRouter()

api_v1_router.include_router(health.router, tags=["Health"])
api_v1_router.include_router(embeddings.router, prefix="/embeddings", tags=["Embeddings"])
api_v1_router.include_router(search.router, prefix="/search", tags=["Search"])
