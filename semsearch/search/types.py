from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Rejected:
    """A stored value that is not a usable vector."""

    reason: str


@dataclass(frozen=True)
class Incomparable:
    """Two vectors that cannot be scored against each other."""

    reason: str


@dataclass(frozen=True)
class StoredRecord:
    """One corpus row as read from the record store.

    ``embedding`` is whatever the store returned and has not been validated.
    """

    id: str
    content: str | None
    embedding: Any


@dataclass(frozen=True)
class ScoredResult:
    id: str
    content: str | None
    similarity: float


@dataclass
class ScanStats:
    scanned: int = 0
    scored: int = 0
    rejected: int = 0
    wrong_dimension: int = 0
    incomparable: int = 0


@dataclass(frozen=True)
class IngestOutcome:
    """Result of an ingest call.

    ``persisted`` is False when the embedding was computed but the store
    write failed; ``error`` then carries the reason.
    """

    record_id: str | None
    embedding: list[float]
    persisted: bool
    error: str | None = None
