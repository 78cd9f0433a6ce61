"""Deterministic result-set generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: 10, 100 and 500 documents per result set.
Each tier provides an "equal" pair (same documents, reversed order, fresh
_id values) and an "unequal" pair (last document differs in one field).

Reversal is the worst case for first-fit matching: the k-th left document
is only found after scanning past every other remaining candidate.
"""

from __future__ import annotations

from typing import Any

import pytest

Results = list[dict[str, Any]]


def generate_document(i: int, id_offset: int = 0) -> dict[str, Any]:
    """Generate one result document with nested arrays and sub-documents."""
    return {
        "_id": i + id_offset,
        "group": f"group_{i % 7}",
        "total": i * 3,
        "tags": [f"t{i % 3}", f"t{i % 5}", "common"],
        "stats": {"min": i, "max": i * 2, "history": [i, i + 1, i + 2]},
    }


def _make_equal(n: int) -> tuple[Results, Results]:
    left = [generate_document(i) for i in range(n)]
    right = [generate_document(i, id_offset=10_000) for i in reversed(range(n))]
    for doc in right:
        doc["tags"] = list(reversed(doc["tags"]))
    return left, right


def _make_unequal(n: int) -> tuple[Results, Results]:
    left, right = _make_equal(n)
    right[0] = {**right[0], "total": -1}
    return left, right


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10_equal() -> tuple[Results, Results]:
    return _make_equal(10)


@pytest.fixture
def pair_10_unequal() -> tuple[Results, Results]:
    return _make_unequal(10)


@pytest.fixture
def pair_100_equal() -> tuple[Results, Results]:
    return _make_equal(100)


@pytest.fixture
def pair_100_unequal() -> tuple[Results, Results]:
    return _make_unequal(100)


@pytest.fixture
def pair_500_equal() -> tuple[Results, Results]:
    return _make_equal(500)


@pytest.fixture
def pair_500_unequal() -> tuple[Results, Results]:
    return _make_unequal(500)
