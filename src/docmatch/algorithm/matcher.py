"""Pairing strategies for unordered collection equality.

Two matchers share one contract: given left and right sequences and an
equality predicate, return a ``{left_index: right_index}`` mapping in which
every right index is used at most once.  A complete pairing has one entry
per left element.

- ``greedy_match``:    first-fit over a consumed-index set.  Stops at the
  first left element that finds no partner, so an incomplete result's
  smallest missing key is the element that failed.
- ``optimal_match``:   maximum bipartite matching.  Builds a 0/inf cost
  matrix and solves it with ``hungarian_match``.

``hungarian_match`` wraps scipy's ``linear_sum_assignment`` so that
infinite-cost cells never reach the solver (which would raise
``ValueError``).  Guard value formula: ``finite_max * 2.0 + 1.0``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

Predicate = Callable[[Any, Any], bool]


def hungarian_match(
    cost_matrix: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute optimal bipartite assignment with np.inf guard.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  May contain
            ``np.inf`` to mark forbidden assignments.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays giving the
        optimal assignment, with any pair whose *original* cost was
        infinite removed.  Empty arrays are returned when no valid
        assignment exists.
    """
    if cost_matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.asarray(cost_matrix, dtype=float)

    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return np.array([], dtype=int), np.array([], dtype=int)

    if inf_mask.any():
        finite_max = float(cost[~inf_mask].max())
        guard_value = finite_max * 2.0 + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        original = np.asarray(cost_matrix, dtype=float)
        keep = np.isfinite(original[row_ind, col_ind])
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return row_ind, col_ind


def greedy_match(
    left: Sequence[Any],
    right: Sequence[Any],
    predicate: Predicate,
) -> dict[int, int]:
    """Pair each left element with the first unconsumed equal right element.

    Left elements are visited in order and right indices are scanned in
    ascending order.  A right index, once taken, is never reconsidered, so
    ``[1, 1]`` never matches ``[1, 2]``.

    Known approximation: first-fit commits without backtracking.  When the
    predicate is not an equivalence relation an earlier left element can
    take the only partner a later one could use, and a valid pairing is
    missed.  Use ``optimal_match`` when that matters.

    Returns:
        The pairs found before the first unmatched left element.
    """
    consumed: set[int] = set()
    pairs: dict[int, int] = {}
    for i, left_item in enumerate(left):
        for j, right_item in enumerate(right):
            if j not in consumed and predicate(left_item, right_item):
                consumed.add(j)
                pairs[i] = j
                break
        else:
            return pairs
    return pairs


def optimal_match(
    left: Sequence[Any],
    right: Sequence[Any],
    predicate: Predicate,
) -> dict[int, int]:
    """Pair left and right elements with a maximum bipartite matching.

    Every (i, j) cell costs 0.0 when ``predicate(left[i], right[j])`` holds
    and ``np.inf`` otherwise.  Minimising total cost then maximises the
    number of equal pairs.  Evaluates the predicate on all ``m * n`` pairs.

    Returns:
        The maximum set of pairs; complete iff a full pairing exists.
    """
    m = len(left)
    n = len(right)
    if m == 0 or n == 0:
        return {}

    cost_matrix = np.full((m, n), np.inf, dtype=float)
    for i, left_item in enumerate(left):
        for j, right_item in enumerate(right):
            if predicate(left_item, right_item):
                cost_matrix[i, j] = 0.0

    row_ind, col_ind = hungarian_match(cost_matrix)
    return {int(i): int(j) for i, j in zip(row_ind, col_ind, strict=True)}


def first_unmatched(pairs: dict[int, int], size: int) -> int | None:
    """Return the smallest left index in ``range(size)`` missing from ``pairs``."""
    for i in range(size):
        if i not in pairs:
            return i
    return None
