from __future__ import annotations

import asyncio
import logging
import threading

from fastembed import TextEmbedding

from semsearch.core.config import settings
from semsearch.core.exceptions import UpstreamUnavailableError
from semsearch.integrations.embedding.base import EmbeddingProvider

logger = logging.getLogger(__name__)


class LocalEmbeddingEngine(EmbeddingProvider):
    """Embeds text in-process with a fastembed model.

    One instance per process: the model is large, so it is loaded once on
    first use and shared by every request.
    """

    _instance: LocalEmbeddingEngine | None = None
    _model: TextEmbedding | None = None
    _lock: threading.Lock = threading.Lock()

    def __new__(cls) -> LocalEmbeddingEngine:
        if cls._instance is None:
            engine = super().__new__(cls)
            engine._model = None
            cls._instance = engine
        return cls._instance

    def _get_model(self) -> TextEmbedding:
        if self._model is not None:
            return self._model
        with self._lock:
            if self._model is None:
                logger.info("Loading local embedding model %s", settings.embedding_model)
                self._model = TextEmbedding(model_name=settings.embedding_model)
        return self._model

    def embed_sync(self, text: str) -> list[float]:
        """Embed one text on the calling thread."""
        vectors = list(self._get_model().embed([text]))
        if not vectors:
            raise UpstreamUnavailableError("Local embedding model returned no vector")
        return [float(x) for x in vectors[0]]

    async def embed(self, text: str) -> list[float]:
        try:
            return await asyncio.to_thread(self.embed_sync, text)
        except UpstreamUnavailableError:
            raise
        except Exception as e:
            raise UpstreamUnavailableError(f"Local embedding model failed: {e}") from e

    def model_name(self) -> str:
        return settings.embedding_model
