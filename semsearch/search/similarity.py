from __future__ import annotations

import math
from collections.abc import Sequence

from semsearch.search.types import Incomparable


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float | Incomparable:
    """Cosine similarity of two equal-length vectors.

    Returns ``Incomparable`` instead of raising when the lengths differ,
    either vector has zero magnitude, or the sums overflow.
    """
    if len(a) != len(b):
        return Incomparable("dimension mismatch")
    if len(a) == 0:
        return Incomparable("empty vector")

    # compensated summation
    try:
        dot = math.fsum(x * y for x, y in zip(a, b, strict=True))
        norm_a = math.sqrt(math.fsum(x * x for x in a))
        norm_b = math.sqrt(math.fsum(y * y for y in b))
    except OverflowError:
        return Incomparable("overflow")

    if not (math.isfinite(dot) and math.isfinite(norm_a) and math.isfinite(norm_b)):
        return Incomparable("overflow")
    if norm_a == 0.0 or norm_b == 0.0:
        return Incomparable("zero magnitude")

    score = dot / (norm_a * norm_b)
    if not math.isfinite(score):
        return Incomparable("non-finite score")
    return max(-1.0, min(1.0, score))
