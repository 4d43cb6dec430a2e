from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from semsearch.core.config import settings
from semsearch.core.database import get_db
from semsearch.integrations.embedding.base import EmbeddingProvider
from semsearch.integrations.embedding.factory import get_embedding_provider
from semsearch.integrations.store.postgres import PgRecordStore
from semsearch.search.pipeline import SearchService


def get_search_service(
    db: AsyncSession = Depends(get_db),
    embedder: EmbeddingProvider = Depends(get_embedding_provider),
) -> SearchService:
    return SearchService(settings.engine_config(), embedder, PgRecordStore(db))


# Re-export for convenient imports
__all__ = ["get_db", "get_embedding_provider", "get_search_service"]
