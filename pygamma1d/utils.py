"""
utils.py
========
Internal helper functions for pygamma1d.

These are not part of the public API and may change without notice.
"""
from __future__ import annotations

import numpy as np
from typing import Iterator

from .core import InvalidConfiguration

# Upper bound on the number of float64 elements held by one block of a
# pairwise (test sample x resampled point) evaluation.
_MAX_BLOCK_ELEMENTS = 2_000_000


def _resample_positions(*, start: float, stop: float, step: float) -> np.ndarray:
    """
    Positions of a resampled grid.

    Parameters
    ----------
    start : float
        First position, always included.
    stop : float
        Last position of the original profile.
    step : float
        Increment, accumulated (x += step) rather than multiplied.

    Returns
    -------
    positions : np.ndarray
        start, start + step, ... up to the first position that is
        >= stop - step. One increment is always attempted, but no position
        beyond `stop` is ever produced. The original last position is
        generally not part of the grid.
    """
    positions = [start]
    xp = start
    limit = stop - step
    while True:
        nxt = xp + step
        if nxt <= xp:
            raise InvalidConfiguration(
                f"Resample step {step!r} is too small to advance from position {xp!r}.")
        if nxt > stop:
            break
        xp = nxt
        positions.append(xp)
        if not xp < limit:
            break
    return np.asarray(positions, dtype=float)


def _row_blocks(*, n_rows: int, n_cols: int,
                max_elements: int = _MAX_BLOCK_ELEMENTS) -> Iterator[slice]:
    """Yield row slices so that rows * n_cols stays below max_elements."""
    rows = max(1, max_elements // max(n_cols, 1))
    for start in range(0, n_rows, rows):
        yield slice(start, min(start + rows, n_rows))
