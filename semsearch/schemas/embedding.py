from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class EmbeddingCreate(BaseModel):
    id: Any = None
    # "data" is the field name used by older clients
    text: Any = Field(default=None, validation_alias=AliasChoices("text", "data"))


class EmbeddingCreateResponse(BaseModel):
    id: str | None = None
    embedding: list[float]
    persisted: bool
    error: str | None = None
