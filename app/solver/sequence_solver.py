"""
SequenceSolver — the single-path analogue of GridSolver.

There is no branching: every element is visited in order, so the
recurrence only looks one step ahead.  Fed a row-major flattening of a
grid, it answers the forced path through every cell in reading order,
which is a different problem from the right/down traversal.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from app.core.grid import as_sequence
from app.solver.interface import SolverInterface


class SequenceSolver(SolverInterface):
    """
    Minimum initial health to walk a sequence of rooms left to right.

    >>> SequenceSolver().solve([-2, -3, 3])
    6
    """

    timer_name = "dp1d.solver.execution"

    def solve(self, data: Sequence[int] | np.ndarray) -> int:
        rooms = as_sequence(data)
        n = len(rooms)

        table = [0] * (n + 1)
        table[n] = 1
        for i in range(n - 1, -1, -1):
            table[i] = max(1, table[i + 1] - rooms[i])
        return table[0]


def solve_sequence(sequence: Sequence[int] | np.ndarray) -> int:
    """Module-level shortcut for ``SequenceSolver().solve(sequence)``."""
    return SequenceSolver().solve(sequence)
