"""Request-level errors raised by the search service.

Per-candidate data faults are not exceptions; see ``semsearch.search.types``.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for errors surfaced to API callers."""

    error_code: str = "internal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SearchError):
    """The request is malformed and the caller can fix it."""

    error_code = "invalid_input"


class UpstreamUnavailableError(SearchError):
    """The embedding provider failed; nothing was computed."""

    error_code = "upstream_unavailable"


class StoreUnavailableError(SearchError):
    """The record store could not be read."""

    error_code = "store_unavailable"


class PersistenceFailedError(SearchError):
    """The record store rejected a write."""

    error_code = "persistence_failed"
