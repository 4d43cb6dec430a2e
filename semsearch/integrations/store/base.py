from __future__ import annotations

from typing import Protocol

from semsearch.search.types import StoredRecord


class RecordStore(Protocol):
    """Abstract record store interface.

    Implement this protocol to swap storage backends
    (Postgres/pgvector, Supabase REST, in-memory fakes, etc.)
    """

    async def upsert(
        self,
        record_id: str | None,
        embedding: list[float],
        content: str | None = None,
    ) -> str:
        """Create or replace the embedding for *record_id*.

        A missing id is assigned by the store. Returns the id written.
        Raises PersistenceFailedError when the write fails.
        """
        ...

    async def fetch_all(self) -> list[StoredRecord]:
        """Return every record as (id, content, raw embedding).

        Raises StoreUnavailableError when the read fails.
        """
        ...
