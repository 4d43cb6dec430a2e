from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from semsearch.search.similarity import cosine_similarity
from semsearch.search.types import (
    Incomparable,
    Rejected,
    ScanStats,
    ScoredResult,
    StoredRecord,
)
from semsearch.search.validation import validate_vector

logger = logging.getLogger(__name__)


class CorpusScanner:
    """Exact linear scan of a corpus against one query vector.

    Every candidate is validated, dimension-checked and scored; candidates
    that fail any step are skipped and counted, never raised. The cost is
    O(N * D) per query with no index, so the scanner warns once the corpus
    grows past ``warn_threshold`` rows.
    """

    def __init__(self, yield_every: int = 256, warn_threshold: int = 50_000) -> None:
        self.yield_every = max(1, yield_every)
        self.warn_threshold = warn_threshold

    async def scan(
        self,
        query: Sequence[float],
        candidates: Sequence[StoredRecord],
        expected_dim: int,
    ) -> list[ScoredResult]:
        """Score every valid candidate against *query*, in corpus order.

        Yields to the event loop every ``yield_every`` candidates so a
        cancelled request raises ``CancelledError`` here instead of
        returning a partial list.
        """
        stats = ScanStats()

        if len(candidates) > self.warn_threshold:
            logger.warning(
                "Scanning %d records exceeds the linear-scan threshold of %d; "
                "search latency grows with corpus size.",
                len(candidates),
                self.warn_threshold,
            )

        query_vector = validate_vector(query)
        if isinstance(query_vector, Rejected) or len(query_vector) != expected_dim:
            logger.error("Query vector is unusable for dimension %d; nothing to score.", expected_dim)
            return []

        results: list[ScoredResult] = []
        for position, candidate in enumerate(candidates):
            if position and position % self.yield_every == 0:
                await asyncio.sleep(0)

            stats.scanned += 1
            scored = self._score_candidate(query_vector, candidate, expected_dim, stats)
            if scored is not None:
                results.append(scored)

        logger.info(
            "Scan complete: %d scanned, %d scored, %d rejected, %d wrong dimension, %d incomparable.",
            stats.scanned,
            stats.scored,
            stats.rejected,
            stats.wrong_dimension,
            stats.incomparable,
        )
        return results

    @staticmethod
    def _score_candidate(
        query_vector: list[float],
        candidate: StoredRecord,
        expected_dim: int,
        stats: ScanStats,
    ) -> ScoredResult | None:
        vector = validate_vector(candidate.embedding)
        if isinstance(vector, Rejected):
            stats.rejected += 1
            logger.debug("Skipping record %s: %s", candidate.id, vector.reason)
            return None

        if len(vector) != expected_dim:
            stats.wrong_dimension += 1
            logger.debug(
                "Skipping record %s: dimension %d, expected %d",
                candidate.id,
                len(vector),
                expected_dim,
            )
            return None

        similarity = cosine_similarity(query_vector, vector)
        if isinstance(similarity, Incomparable):
            stats.incomparable += 1
            logger.debug("Skipping record %s: %s", candidate.id, similarity.reason)
            return None

        stats.scored += 1
        return ScoredResult(id=candidate.id, content=candidate.content, similarity=similarity)
