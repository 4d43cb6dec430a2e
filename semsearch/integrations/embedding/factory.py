from __future__ import annotations

from functools import lru_cache

from semsearch.core.config import settings
from semsearch.integrations.embedding.base import EmbeddingProvider


@lru_cache(maxsize=1)
def get_embedding_provider() -> EmbeddingProvider:
    """Return the process-wide embedding provider selected by settings."""
    if settings.embedding_backend == "local":
        from semsearch.integrations.embedding.local import LocalEmbeddingEngine

        return LocalEmbeddingEngine()

    from semsearch.integrations.embedding.openai import OpenAIEmbeddingClient

    return OpenAIEmbeddingClient()
