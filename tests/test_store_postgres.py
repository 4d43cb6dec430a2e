from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from semsearch.core.exceptions import PersistenceFailedError, StoreUnavailableError
from semsearch.integrations.store.postgres import PgRecordStore
from semsearch.search.pipeline import SearchService
from semsearch.search.types import StoredRecord


def _compiled_sql(mock_db: AsyncMock) -> str:
    stmt = mock_db.execute.call_args[0][0]
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_with_id_replaces_embedding_on_conflict() -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    store = PgRecordStore(mock_db)

    record_id = await store.upsert("complaint-1", [0.1, 0.2], content="late delivery")

    assert record_id == "complaint-1"
    mock_db.commit.assert_awaited_once()
    sql = _compiled_sql(mock_db)
    assert "INSERT INTO complaints" in sql
    assert "ON CONFLICT (id) DO UPDATE SET embedding = excluded.embedding" in sql
    assert "content = excluded.content" not in sql


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_without_id_assigns_one() -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    store = PgRecordStore(mock_db)

    record_id = await store.upsert(None, [0.1, 0.2])

    assert isinstance(record_id, str)
    assert len(record_id) == 36
    params = mock_db.execute.call_args[0][0].compile(dialect=postgresql.dialect()).params
    assert params["id"] == record_id


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_failure_rolls_back_and_raises() -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    mock_db.execute.side_effect = SQLAlchemyError("connection reset")
    store = PgRecordStore(mock_db)

    with pytest.raises(PersistenceFailedError, match="complaint-1"):
        await store.upsert("complaint-1", [0.1, 0.2])

    mock_db.rollback.assert_awaited_once()
    mock_db.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.unit
async def test_fetch_all_returns_raw_rows_in_id_order() -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    mock_result = MagicMock()
    vector = np.array([0.5, 0.5])
    mock_result.all.return_value = [
        SimpleNamespace(id="a", content="first", embedding=vector),
        SimpleNamespace(id="b", content=None, embedding=None),
    ]
    mock_db.execute.return_value = mock_result
    store = PgRecordStore(mock_db)

    records = await store.fetch_all()

    assert records[0] == StoredRecord(id="a", content="first", embedding=vector)
    assert records[1] == StoredRecord(id="b", content=None, embedding=None)
    sql = _compiled_sql(mock_db)
    assert "ORDER BY complaints.id" in sql
    assert "WHERE" not in sql


@pytest.mark.asyncio
@pytest.mark.unit
async def test_fetch_all_failure_is_store_unavailable() -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    mock_db.execute.side_effect = SQLAlchemyError("could not connect")
    store = PgRecordStore(mock_db)

    with pytest.raises(StoreUnavailableError):
        await store.fetch_all()


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_connection_refused_is_persistence_failure() -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    mock_db.execute.side_effect = ConnectionRefusedError(111, "Connect call failed")
    mock_db.rollback.side_effect = ConnectionRefusedError(111, "Connect call failed")
    store = PgRecordStore(mock_db)

    with pytest.raises(PersistenceFailedError, match="complaint-1"):
        await store.upsert("complaint-1", [0.1, 0.2])

    mock_db.rollback.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.unit
@pytest.mark.parametrize(
    "error",
    [ConnectionRefusedError(111, "Connect call failed"), TimeoutError(), OSError("unreachable")],
)
async def test_fetch_all_connection_errors_are_store_unavailable(error) -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    mock_db.execute.side_effect = error
    store = PgRecordStore(mock_db)

    with pytest.raises(StoreUnavailableError):
        await store.fetch_all()


@pytest.mark.asyncio
@pytest.mark.unit
async def test_ingest_keeps_embedding_when_database_is_unreachable(
    engine_config, fake_embedder
) -> None:
    mock_db = AsyncMock(spec=AsyncSession)
    mock_db.execute.side_effect = ConnectionRefusedError(111, "Connect call failed")
    service = SearchService(engine_config, fake_embedder, PgRecordStore(mock_db))

    outcome = await service.ingest("east", record_id="x")

    assert outcome.persisted is False
    assert outcome.embedding == [1.0, 0.0]
    assert outcome.error

    with pytest.raises(StoreUnavailableError):
        await service.search("east")
