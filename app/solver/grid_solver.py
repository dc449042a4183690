"""
GridSolver — bottom-up DP for the 2D dungeon (moves: right or down).

``table[i][j]`` holds the health needed on entering cell (i, j).  The
table carries one extra row and column so the edge cells need no
special casing: the border is "unreachable" except for the two cells
just past the goal, which demand 1 health after clearing it.

Example
-------
>>> GridSolver().solve([[-2, -3, 3], [-5, -10, 1], [10, 30, -5]])
7
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from app.core.grid import as_grid
from app.solver.interface import SolverInterface

# Never chosen by min() for a cell inside the grid.
UNREACHABLE = math.inf


class GridSolver(SolverInterface):
    """Minimum initial health over right/down paths through a grid."""

    timer_name = "dp2d.solver.execution"

    def solve(self, data: Sequence[Sequence[int]] | np.ndarray) -> int:
        grid = as_grid(data)
        m, n = len(grid), len(grid[0])

        table: list[list[float]] = [
            [UNREACHABLE] * (n + 1) for _ in range(m + 1)
        ]
        table[m][n - 1] = 1
        table[m - 1][n] = 1

        for i in range(m - 1, -1, -1):
            row = grid[i]
            below, here = table[i + 1], table[i]
            for j in range(n - 1, -1, -1):
                need = min(below[j], here[j + 1]) - row[j]
                here[j] = max(1, need)

        return int(table[0][0])


def solve_grid(grid: Sequence[Sequence[int]] | np.ndarray) -> int:
    """Module-level shortcut for ``GridSolver().solve(grid)``."""
    return GridSolver().solve(grid)
