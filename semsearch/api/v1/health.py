from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from semsearch.api.deps import get_db, get_embedding_provider
from semsearch.core.config import settings
from semsearch.integrations.embedding.base import EmbeddingProvider
from semsearch.schemas import DependencyHealth, HealthCheckResponse

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    db: AsyncSession = Depends(get_db),
    embedder: EmbeddingProvider = Depends(get_embedding_provider),
) -> HealthCheckResponse:
    """Check service health and dependency status."""
    dependencies: dict[str, DependencyHealth] = {}

    # Check the record store
    try:
        start = time.monotonic()
        await db.execute(text("SELECT 1"))
        latency = (time.monotonic() - start) * 1000
        dependencies["database"] = DependencyHealth(
            name="database",
            status="ok",
            latency_ms=round(latency, 2),
        )
    except Exception as exc:
        dependencies["database"] = DependencyHealth(
            name="database",
            status="error",
            message=str(exc),
        )

    # The embedding provider is only checked for configuration; a probe
    # request would be billed.
    if settings.embedding_backend == "openai" and not settings.embedding_api_key:
        dependencies["embeddings"] = DependencyHealth(
            name="embeddings",
            status="degraded",
            message="embedding_api_key is not set",
        )
    else:
        dependencies["embeddings"] = DependencyHealth(
            name="embeddings",
            status="ok",
            message=embedder.model_name(),
        )

    statuses = [dep.status for dep in dependencies.values()]
    overall = "ok" if all(s == "ok" for s in statuses) else "degraded"

    return HealthCheckResponse(
        status=overall,
        version="0.1.0",
        dependencies=dependencies,
    )
