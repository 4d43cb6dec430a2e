import asyncio
import os
import sys
import traceback

# Add project root to path so we can import semsearch
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from semsearch.core.config import settings
from semsearch.core.database import async_session_factory
from semsearch.integrations.embedding.factory import get_embedding_provider
from semsearch.integrations.store.postgres import PgRecordStore
from semsearch.search.pipeline import SearchService


async def main():
    print("--- Verifying search (embedding provider & record store) ---")
    print(f"Backend: {settings.embedding_backend}, model: {settings.embedding_model}, "
          f"dimension: {settings.embedding_dimension}")

    embedder = get_embedding_provider()

    query_text = sys.argv[1] if len(sys.argv) > 1 else "the delivery arrived damaged"
    print(f"\nSearching for query: '{query_text}'")

    async with async_session_factory() as db:
        service = SearchService(settings.engine_config(), embedder, PgRecordStore(db))
        try:
            results = await service.search(query_text, limit=5)

            print(f"\n✅ Found {len(results)} records.")
            for r in results:
                preview = (r.content or "")[:80]
                print(f"- {r.id} | similarity: {r.similarity:.4f} | {preview}")

        except Exception as e:
            print(f"❌ Search failed: {e}")
            traceback.print_exc()

    aclose = getattr(embedder, "aclose", None)
    if aclose is not None:
        await aclose()


if __name__ == "__main__":
    asyncio.run(main())
