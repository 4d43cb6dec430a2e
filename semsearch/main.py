from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from semsearch.core.config import settings
from semsearch.core.database import engine
from semsearch.core.exceptions import (
    InvalidInputError,
    SearchError,
    StoreUnavailableError,
    UpstreamUnavailableError,
)
from semsearch.integrations.embedding.factory import get_embedding_provider

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[SearchError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    UpstreamUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Startup
    logger.info(
        "Starting %s with embedding model %s (dimension %d).",
        settings.app_name,
        settings.embedding_model,
        settings.embedding_dimension,
    )
    yield
    # Shutdown
    if get_embedding_provider.cache_info().currsize:
        aclose = getattr(get_embedding_provider(), "aclose", None)
        if aclose is not None:
            await aclose()
        get_embedding_provider.cache_clear()
    await engine.dispose()


async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body.", "error_code": InvalidInputError.error_code},
    )


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.app_log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SearchError, search_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Register routes
    from semsearch.api.v1.router import api_v1_router

    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()
