from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from semsearch.core.config import settings
from semsearch.core.exceptions import UpstreamUnavailableError
from semsearch.integrations.embedding.base import EmbeddingProvider

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class OpenAIEmbeddingClient(EmbeddingProvider):
    """Client for OpenAI-compatible ``/embeddings`` endpoints."""

    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> None:
        """Initialize the embeddings client.

        Args:
            model: Embedding model id; defaults to ``settings.embedding_model``.
            api_key: Bearer token; defaults to ``settings.embedding_api_key``.
            base_url: API root such as ``https://api.openai.com/v1``.
            timeout: Per-request timeout in seconds.
            max_retries: Attempts for 429/5xx and transient network errors.
        """
        self.model = model or settings.embedding_model
        self.base_url = (base_url or settings.embedding_base_url).rstrip("/")
        self.max_retries = max(1, max_retries or settings.embedding_max_retries)

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key or settings.embedding_api_key}"},
            timeout=httpx.Timeout(timeout or settings.embedding_timeout_seconds),
        )

    async def _request(self, payload: dict[str, Any]) -> httpx.Response:
        """POST to /embeddings with retries and exponential backoff."""
        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self.client.request(
                    method="POST",
                    url="/embeddings",
                    json=payload,
                )
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                if e.response.status_code in RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                    logger.warning(
                        "Embedding request returned %d (attempt %d/%d), retrying.",
                        e.response.status_code,
                        attempt,
                        self.max_retries,
                    )
                    await asyncio.sleep(2**attempt)
                    continue
                raise

            except (httpx.TimeoutException, httpx.NetworkError):
                if attempt < self.max_retries:
                    await asyncio.sleep(2**attempt)
                    continue
                raise

        raise RuntimeError("Unreachable")

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding for a single text string."""
        try:
            response = await self._request({"model": self.model, "input": text})
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f"Embedding request failed ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"Cannot reach embedding service at {self.base_url}: {e}"
            ) from e

        try:
            embedding = response.json()["data"][0]["embedding"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamUnavailableError("Embedding service returned an unexpected payload") from e

        if not isinstance(embedding, list):
            raise UpstreamUnavailableError("Embedding service returned an unexpected payload")

        logger.debug("Embedding length: %d", len(embedding))
        return embedding

    def model_name(self) -> str:
        return self.model

    async def aclose(self) -> None:
        await self.client.aclose()
