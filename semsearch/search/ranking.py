from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from semsearch.search.types import ScoredResult

DEFAULT_LIMIT = 5


def normalize_limit(
    limit: Any,
    default: int = DEFAULT_LIMIT,
    maximum: int | None = None,
) -> int:
    """Return a usable result count for a client-supplied *limit*.

    Anything that is not a positive int (bools, floats, strings, None)
    falls back to *default*; values above *maximum* are clamped.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        limit = default
    if maximum is not None:
        limit = min(limit, maximum)
    return limit


def select_top(
    results: Sequence[ScoredResult],
    limit: Any = DEFAULT_LIMIT,
    default: int = DEFAULT_LIMIT,
    maximum: int | None = None,
) -> list[ScoredResult]:
    """Highest-similarity results first, at most *limit* of them.

    The sort is stable, so equal scores keep their scan order.
    """
    if not results:
        return []
    size = normalize_limit(limit, default=default, maximum=maximum)
    ranked = sorted(results, key=lambda r: r.similarity, reverse=True)
    return ranked[:size]
