from __future__ import annotations

import uuid

from pgvector.sqlalchemy import Vector  # type: ignore[import-untyped]
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from semsearch.core.config import settings
from semsearch.models.base import Base, TimestampMixin


def generate_record_id() -> str:
    return str(uuid.uuid4())


class Record(TimestampMixin, Base):
    """A text record with its semantic embedding."""

    __tablename__ = settings.records_table

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_record_id)
    content: Mapped[str | None] = mapped_column(Text, default=None)
    # No fixed dimension: rows embedded by older models stay readable and are
    # filtered by the scanner instead.
    embedding: Mapped[list[float] | None] = mapped_column(
        Vector(), nullable=True, default=None
    )
