from __future__ import annotations

import logging
from typing import Any

from semsearch.core.config import EngineConfig
from semsearch.core.exceptions import (
    InvalidInputError,
    PersistenceFailedError,
    UpstreamUnavailableError,
)
from semsearch.integrations.embedding.base import EmbeddingProvider
from semsearch.integrations.store.base import RecordStore
from semsearch.search.ranking import select_top
from semsearch.search.scanner import CorpusScanner
from semsearch.search.types import IngestOutcome, Rejected, ScoredResult
from semsearch.search.validation import validate_vector

logger = logging.getLogger(__name__)


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Invalid input: '{field}' must be a non-empty string.")
    return value


class SearchService:
    """Ingestion and exact-scan semantic search over the record store.

    Holds no per-request state; one instance may serve concurrent calls.
    """

    def __init__(
        self,
        config: EngineConfig,
        embedder: EmbeddingProvider,
        store: RecordStore,
    ) -> None:
        self.config = config
        self.embedder = embedder
        self.store = store
        self.scanner = CorpusScanner(
            yield_every=config.scan_yield_every,
            warn_threshold=config.scan_warn_threshold,
        )

    async def _embed(self, text: str) -> list[float]:
        """Embed *text* and check the vector against the configured dimension."""
        raw = await self.embedder.embed(text)

        vector = validate_vector(raw)
        if isinstance(vector, Rejected):
            raise UpstreamUnavailableError(f"Embedding service returned an invalid vector: {vector.reason}")
        if len(vector) != self.config.embedding_dimension:
            raise UpstreamUnavailableError(
                f"Embedding service returned dimension {len(vector)}, "
                f"expected {self.config.embedding_dimension}"
            )
        return vector

    async def search(self, query_text: Any, limit: Any = None) -> list[ScoredResult]:
        """Rank stored records by cosine similarity to *query_text*."""
        query = _require_text(query_text, "query")

        # 1. Embed the query
        query_vector = await self._embed(query)

        # 2. Fetch the full corpus; no filtering is pushed to the store
        candidates = await self.store.fetch_all()

        # 3. Score every candidate
        results = await self.scanner.scan(
            query_vector, candidates, self.config.embedding_dimension
        )

        # 4. Rank and truncate
        ranked = select_top(
            results,
            limit,
            default=self.config.default_limit,
            maximum=self.config.max_limit,
        )
        logger.info(
            "Search returned %d of %d scored records (corpus size %d).",
            len(ranked),
            len(results),
            len(candidates),
        )
        return ranked

    async def ingest(self, text: Any, record_id: Any = None) -> IngestOutcome:
        """Embed *text* and upsert it under *record_id*.

        A failed store write does not raise: the embedding is still returned
        with ``persisted=False``.
        """
        text = _require_text(text, "text")
        if record_id is not None and (isinstance(record_id, bool) or not isinstance(record_id, (str, int))):
            raise InvalidInputError("Invalid input: 'id' must be a string or an integer.")
        key = str(record_id) if record_id is not None and record_id != "" else None

        embedding = await self._embed(text)

        try:
            written_id = await self.store.upsert(key, embedding, content=text)
        except PersistenceFailedError as e:
            logger.error("Embedding computed but not saved for record %s: %s", key, e)
            return IngestOutcome(
                record_id=key,
                embedding=embedding,
                persisted=False,
                error=e.message,
            )

        return IngestOutcome(record_id=written_id, embedding=embedding, persisted=True)
