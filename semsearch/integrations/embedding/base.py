from __future__ import annotations

from typing import Protocol


class EmbeddingProvider(Protocol):
    """Abstract embedding generator interface.

    Implement this protocol to swap embedding backends
    (OpenAI-compatible HTTP APIs, local fastembed models, etc.)
    """

    async def embed(self, text: str) -> list[float]:
        """Return the embedding for a single text.

        Raises UpstreamUnavailableError when the backend fails.
        """
        ...

    def model_name(self) -> str:
        """Return the name of the embedding model."""
        ...
