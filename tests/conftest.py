from __future__ import annotations

import os

os.environ["EMBEDDING_API_KEY"] = "test-key"
os.environ["EMBEDDING_BACKEND"] = "openai"
os.environ["APP_ENV"] = "test"

import uuid

import pytest

from semsearch.core.config import EngineConfig
from semsearch.core.exceptions import PersistenceFailedError, UpstreamUnavailableError
from semsearch.search.types import StoredRecord


class FakeEmbedder:
    """Deterministic embedding provider backed by a text -> vector table."""

    def __init__(self, vectors: dict[str, list[float]] | None = None) -> None:
        self.vectors = dict(vectors or {})
        self.fail = False
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail:
            raise UpstreamUnavailableError("embedding service down")
        return list(self.vectors[text])

    def model_name(self) -> str:
        return "fake-embedder"


class InMemoryRecordStore:
    """RecordStore fake with last-write-wins upserts, read in id order."""

    def __init__(self, rows: list[StoredRecord] | None = None) -> None:
        self.rows: dict[str, StoredRecord] = {row.id: row for row in rows or []}
        self.fail_writes = False

    async def upsert(
        self,
        record_id: str | None,
        embedding: list[float],
        content: str | None = None,
    ) -> str:
        if self.fail_writes:
            raise PersistenceFailedError("write rejected")
        record_id = record_id or str(uuid.uuid4())
        existing = self.rows.get(record_id)
        if existing is not None:
            content = existing.content
        self.rows[record_id] = StoredRecord(id=record_id, content=content, embedding=list(embedding))
        return record_id

    async def fetch_all(self) -> list[StoredRecord]:
        return [self.rows[key] for key in sorted(self.rows)]


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(embedding_model="fake-embedder", embedding_dimension=2)


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder({"east": [1.0, 0.0], "north": [0.0, 1.0], "north-east": [0.7, 0.7]})


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()

