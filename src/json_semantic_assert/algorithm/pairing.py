"""Similarity pairing of leftover array elements.

When an unordered array comparison has expected and actual elements left
over after exact matching, they are paired by greatest structural
similarity: the pairing minimizing the total number of scratch mismatches.
The assignment is solved with scipy's ``linear_sum_assignment``.

Ties are broken towards positional pairing by adding a small penalty
proportional to the index distance, scaled so it can never outweigh a
single mismatch.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]


def pair_by_similarity(
    mismatches: np.ndarray,
    row_indices: Sequence[int],
    col_indices: Sequence[int],
) -> list[tuple[int, int]]:
    """Pair rows with columns minimizing the total mismatch count.

    Args:
        mismatches:  2-D array of shape ``(m, n)``; cell ``[r, c]`` is the
            number of mismatches found comparing row ``r`` with column ``c``.
        row_indices: Original array index of each row (expected elements).
        col_indices: Original array index of each column (actual elements).

    Returns:
        ``min(m, n)`` pairs of *original* indices ``(expected_i, actual_j)``,
        ordered by expected index.  Empty when either side is empty.
    """
    if mismatches.size == 0:
        return []

    cost = np.asarray(mismatches, dtype=float)
    rows = np.asarray(row_indices, dtype=float).reshape(-1, 1)
    cols = np.asarray(col_indices, dtype=float).reshape(1, -1)
    distance = np.abs(rows - cols)

    # Total tie-break penalty stays strictly below one mismatch.
    scale = 1.0 / ((float(distance.max()) + 1.0) * (min(cost.shape) + 1.0))
    row_ind, col_ind = linear_sum_assignment(cost + distance * scale)

    pairs = [
        (int(row_indices[r]), int(col_indices[c]))
        for r, c in zip(row_ind.tolist(), col_ind.tolist(), strict=True)
    ]
    return sorted(pairs)
