from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_upsert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from semsearch.core.exceptions import PersistenceFailedError, StoreUnavailableError
from semsearch.integrations.store.base import RecordStore
from semsearch.models.record import Record, generate_record_id
from semsearch.search.types import StoredRecord

logger = logging.getLogger(__name__)

# asyncpg raises connection and socket errors unwrapped
STORE_ERRORS = (SQLAlchemyError, OSError, TimeoutError)


class PgRecordStore(RecordStore):
    """RecordStore implementation using PostgreSQL with pgvector."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def upsert(
        self,
        record_id: str | None,
        embedding: list[float],
        content: str | None = None,
    ) -> str:
        """Insert a record or replace its embedding, keyed by id.

        Content is only written for new rows; an existing row keeps its
        content and gets the new embedding.
        """
        record_id = record_id or generate_record_id()

        stmt = pg_upsert(Record).values(
            id=record_id,
            content=content,
            embedding=embedding,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={"embedding": stmt.excluded.embedding, "updated_at": func.now()},
        )

        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except STORE_ERRORS as e:
            logger.error("Upsert of record %s failed: %s", record_id, e)
            try:
                await self.db.rollback()
            except STORE_ERRORS as rollback_error:
                logger.warning("Rollback after failed upsert also failed: %s", rollback_error)
            raise PersistenceFailedError(f"Could not save embedding for record {record_id}") from e

        logger.info("Record %s upserted.", record_id)
        return record_id

    async def fetch_all(self) -> list[StoredRecord]:
        """Read the full corpus, ordered by id so scans are reproducible."""
        stmt = select(Record.id, Record.content, Record.embedding).order_by(Record.id)
        try:
            result = await self.db.execute(stmt)
            rows = result.all()
        except STORE_ERRORS as e:
            logger.error("Corpus fetch failed: %s", e)
            raise StoreUnavailableError("Could not read records from the store") from e

        return [
            StoredRecord(id=str(row.id), content=row.content, embedding=row.embedding)
            for row in rows
        ]
