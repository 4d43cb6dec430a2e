from __future__ import annotations

import math
from decimal import Decimal

import numpy as np
import pytest

from semsearch.search.types import Rejected
from semsearch.search.validation import validate_vector


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ([1, 0.5, -2], [1.0, 0.5, -2.0]),
        ((0.25, 0.75), [0.25, 0.75]),
        ("[0.1,0.2,0.3]", [0.1, 0.2, 0.3]),
        (" [1, -1e-3] ", [1.0, -0.001]),
    ],
)
def test_accepts_numeric_sequences(raw, expected) -> None:
    assert validate_vector(raw) == expected


@pytest.mark.unit
def test_accepts_numpy_array() -> None:
    result = validate_vector(np.array([0.5, 1.5], dtype=np.float32))
    assert result == [0.5, 1.5]
    assert all(type(x) is float for x in result)


@pytest.mark.unit
def test_accepts_objects_with_to_list() -> None:
    class PgVectorLike:
        def to_list(self) -> list[float]:
            return [1.0, 2.0]

    assert validate_vector(PgVectorLike()) == [1.0, 2.0]


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        None,
        42,
        3.14,
        {"a": 1},
        b"[1,2]",
        [],
        "[]",
        "not a vector",
        "[1, two, 3]",
        "[1,,2]",
        [1, "2"],
        [1, None],
        [True, 0.0],
        [1.0, math.nan],
        [1.0, math.inf],
        "[1, nan]",
        "[inf, 1]",
        [Decimal("1.0"), [2.0]],
    ],
)
def test_rejects_malformed_values(raw) -> None:
    result = validate_vector(raw)
    assert isinstance(result, Rejected)
    assert result.reason


@pytest.mark.unit
def test_missing_embedding_reason() -> None:
    assert validate_vector(None) == Rejected("missing embedding")


@pytest.mark.unit
def test_unparsable_string_element_is_named_in_reason() -> None:
    result = validate_vector("[0.1, abc, 0.3]")
    assert isinstance(result, Rejected)
    assert "abc" in result.reason


@pytest.mark.unit
def test_accepts_decimal_elements() -> None:
    assert validate_vector([Decimal("0.5"), 1]) == [0.5, 1.0]


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        [10**400, 1.0],
        [Decimal("sNaN"), 1.0],
        [Decimal("1e400"), 1.0],
    ],
)
def test_elements_outside_float_range_are_rejected(raw) -> None:
    assert isinstance(validate_vector(raw), Rejected)


@pytest.mark.unit
def test_large_finite_elements_are_kept() -> None:
    assert validate_vector([1e154, 1e154]) == [1e154, 1e154]
