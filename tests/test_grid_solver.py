"""Tests for GridSolver — 2D right/down minimum-health DP."""

import itertools

import numpy as np
import pytest

from app.core.errors import InvalidInputError
from app.solver.grid_solver import GridSolver, solve_grid

DUNGEON = [[-2, -3, 3], [-5, -10, 1], [10, 30, -5]]


def _brute_force(grid):
    """Try every right/down path and keep the cheapest starting health."""
    m, n = len(grid), len(grid[0])
    best = None
    for downs in itertools.combinations(range(m + n - 2), m - 1):
        i = j = 0
        total = grid[0][0]
        lowest = total
        for step in range(m + n - 2):
            if step in downs:
                i += 1
            else:
                j += 1
            total += grid[i][j]
            lowest = min(lowest, total)
        need = max(1, 1 - lowest)
        best = need if best is None else min(best, need)
    return best


def test_reference_dungeon():
    assert solve_grid(DUNGEON) == 7


def test_single_cell():
    assert solve_grid([[5]]) == 1
    assert solve_grid([[0]]) == 1
    assert solve_grid([[-1]]) == 2
    assert solve_grid([[-5]]) == 6


def test_single_row_and_column():
    assert solve_grid([[-1, -2, -3]]) == 7
    assert solve_grid([[-1], [-2], [-3]]) == 7


def test_positive_cells_never_lower_the_bar():
    assert solve_grid([[1, 2], [3, 4]]) == 1


def test_gain_later_does_not_pay_for_earlier_loss():
    """A big reward at the end cannot rescue a deficit on the way."""
    assert solve_grid([[-10, 100]]) == 11


def test_accepts_numpy_and_tuples():
    assert solve_grid(np.array(DUNGEON)) == 7
    assert solve_grid(tuple(tuple(r) for r in DUNGEON)) == 7


def test_matches_exhaustive_search_on_random_grids():
    rng = np.random.default_rng(7)
    for _ in range(200):
        m, n = rng.integers(1, 5, size=2)
        grid = rng.integers(-20, 21, size=(m, n)).tolist()
        assert GridSolver().solve(grid) == _brute_force(grid)


def test_result_is_always_at_least_one():
    rng = np.random.default_rng(11)
    for _ in range(100):
        m, n = rng.integers(1, 8, size=2)
        grid = rng.integers(-50, 51, size=(m, n))
        assert solve_grid(grid) >= 1


def test_returns_plain_int():
    assert type(solve_grid(DUNGEON)) is int


@pytest.mark.parametrize(
    "bad",
    [
        [],
        [[]],
        [[1, 2], [3]],
        [1, 2, 3],
        [[1.5, 2]],
        [["a"]],
        [[True, False]],
    ],
)
def test_invalid_grid_rejected(bad):
    with pytest.raises(InvalidInputError):
        solve_grid(bad)
