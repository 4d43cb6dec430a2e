from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from semsearch.api.deps import get_search_service
from semsearch.schemas import EmbeddingCreate, EmbeddingCreateResponse, ErrorResponse
from semsearch.search.pipeline import SearchService

router = APIRouter()


@router.post(
    "",
    response_model=EmbeddingCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": EmbeddingCreateResponse, "description": "Computed but not saved"},
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def create_embedding(
    body: EmbeddingCreate,
    response: Response,
    service: SearchService = Depends(get_search_service),
) -> EmbeddingCreateResponse:
    """Embed a text and upsert it into the record store."""
    outcome = await service.ingest(body.text, record_id=body.id)

    if not outcome.persisted:
        response.status_code = status.HTTP_200_OK

    return EmbeddingCreateResponse(
        id=outcome.record_id,
        embedding=outcome.embedding,
        persisted=outcome.persisted,
        error=outcome.error,
    )
