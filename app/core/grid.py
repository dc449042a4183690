"""
Grid / Sequence helpers — shape checks and the row-major flattening
used when a grid is handed to the single-path solver.

Inputs are normalised through numpy so that lists, tuples and arrays
are all accepted, then handed back as plain Python ints so the DP
tables never overflow a fixed-width dtype.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from app.core.errors import InvalidInputError

Grid = tuple[tuple[int, ...], ...]
Cells = tuple[int, ...]


def _as_int_array(values: Any, ndim: int, what: str) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except ValueError as exc:
        # numpy refuses ragged nested lists
        raise InvalidInputError(f"{what} must be rectangular") from exc

    if arr.ndim != ndim:
        raise InvalidInputError(
            f"{what} must have {ndim} dimension(s), got shape {arr.shape}"
        )
    if arr.size == 0:
        raise InvalidInputError(f"{what} must not be empty")
    if arr.dtype.kind not in "iu":
        raise InvalidInputError(
            f"{what} cells must be integers, got dtype {arr.dtype}"
        )
    return arr


def as_grid(grid: Sequence[Sequence[int]] | np.ndarray) -> Grid:
    """
    Validate *grid* and return it as an immutable tuple of rows.

    Raises InvalidInputError for an empty grid, an empty row, rows of
    different lengths, or non-integer cells.
    """
    arr = _as_int_array(grid, 2, "grid")
    return tuple(tuple(row) for row in arr.tolist())


def as_sequence(sequence: Sequence[int] | np.ndarray) -> Cells:
    """Validate a 1D sequence of health deltas."""
    arr = _as_int_array(sequence, 1, "sequence")
    return tuple(arr.tolist())


def flatten(grid: Sequence[Sequence[int]] | np.ndarray) -> Cells:
    """Row-major flattening: row 0 left-to-right, then row 1, and so on."""
    arr = _as_int_array(grid, 2, "grid")
    return tuple(arr.ravel(order="C").tolist())
