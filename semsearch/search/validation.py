from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Decimal
from numbers import Real
from typing import Any

from semsearch.search.types import Rejected


def _parse_text_vector(raw: str) -> list[float] | Rejected:
    """Parse the text form of a vector, e.g. ``"[0.1,0.2]"``."""
    text = raw.strip()
    if not (text.startswith("[") and text.endswith("]")):
        return Rejected("string is not a vector literal")

    inner = text[1:-1].strip()
    if not inner:
        return []

    parsed: list[float] = []
    for token in inner.split(","):
        try:
            parsed.append(float(token))
        except ValueError:
            return Rejected(f"unparsable element {token.strip()!r}")
    return parsed


def _as_sequence(raw: Any) -> Sequence[Any] | Rejected:
    if isinstance(raw, str):
        return _parse_text_vector(raw)
    if isinstance(raw, (bytes, bytearray)):
        return Rejected("binary value")
    if isinstance(raw, Sequence):
        return raw
    # numpy arrays and pgvector.Vector
    for converter in ("tolist", "to_list"):
        if callable(getattr(raw, converter, None)):
            converted = getattr(raw, converter)()
            if isinstance(converted, list):
                return converted
    return Rejected(f"unsupported type {type(raw).__name__}")


def validate_vector(raw: Any) -> list[float] | Rejected:
    """Normalize a raw stored embedding into a list of finite floats.

    Accepts lists, tuples, numpy arrays, pgvector values and the text form
    of a vector. Anything else yields a ``Rejected`` tag; this function
    never raises for bad data.
    """
    if raw is None:
        return Rejected("missing embedding")

    elements = _as_sequence(raw)
    if isinstance(elements, Rejected):
        return elements
    if len(elements) == 0:
        return Rejected("empty vector")

    vector: list[float] = []
    for element in elements:
        if isinstance(element, bool) or not isinstance(element, (Real, Decimal)):
            return Rejected(f"non-numeric element of type {type(element).__name__}")
        try:
            value = float(element)
        except (OverflowError, ValueError):
            return Rejected("element out of float range")
        if not math.isfinite(value):
            return Rejected("non-finite element")
        vector.append(value)
    return vector
