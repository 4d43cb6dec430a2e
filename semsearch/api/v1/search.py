from __future__ import annotations

from fastapi import APIRouter, Depends

from semsearch.api.deps import get_search_service
from semsearch.schemas import ErrorResponse, SearchHit, SearchQuery, SearchResponse
from semsearch.search.pipeline import SearchService

router = APIRouter()


@router.post(
    "",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def search_records(
    body: SearchQuery,
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """Rank stored records by semantic similarity to the query."""
    results = await service.search(body.query, limit=body.limit)

    return SearchResponse(
        query=body.query,
        results=[SearchHit.model_validate(r) for r in results],
        total_found=len(results),
    )
