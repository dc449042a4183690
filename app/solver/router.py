"""
SolverRouter — maps an experiment variant onto a solving algorithm.

The mapping is explicit and total: every label either appears in the
routing table or falls to the named default algorithm.  An unknown
variant is therefore a routed request, not an error.
"""

from __future__ import annotations

import enum
import logging
from typing import Mapping, Sequence

import numpy as np

from app.core.grid import flatten
from app.solver.grid_solver import GridSolver
from app.solver.interface import SolverInterface
from app.solver.sequence_solver import SequenceSolver

logger = logging.getLogger(__name__)


class Algorithm(str, enum.Enum):
    GRID = "grid"
    SEQUENCE = "sequence"


DEFAULT_ALGORITHM = Algorithm.GRID

# Variant "A" runs the flattened single-path DP; "B" and "C" the 2D DP.
DEFAULT_ROUTES: dict[str, Algorithm] = {
    "A": Algorithm.SEQUENCE,
    "B": Algorithm.GRID,
    "C": Algorithm.GRID,
}


class SolverRouter:
    """
    Dispatch a grid to the solver its variant is routed to.

    Parameters
    ----------
    grid_solver, sequence_solver : SolverInterface
        The strategies behind Algorithm.GRID and Algorithm.SEQUENCE.
    routes : mapping of variant label → Algorithm
    default : Algorithm used for labels missing from *routes*
    """

    def __init__(
        self,
        grid_solver: SolverInterface | None = None,
        sequence_solver: SolverInterface | None = None,
        routes: Mapping[str, Algorithm] | None = None,
        default: Algorithm = DEFAULT_ALGORITHM,
    ) -> None:
        self._solvers: dict[Algorithm, SolverInterface] = {
            Algorithm.GRID: grid_solver or GridSolver(),
            Algorithm.SEQUENCE: sequence_solver or SequenceSolver(),
        }
        self._routes: dict[str, Algorithm] = dict(
            DEFAULT_ROUTES if routes is None else routes
        )
        self._default = default

    # ── Lookup ─────────────────────────────────────────────────────

    def algorithm_for(self, variant: str) -> Algorithm:
        """Return the algorithm *variant* is routed to (default if unknown)."""
        return self._routes.get(variant, self._default)

    def solver_for(self, variant: str) -> SolverInterface:
        return self._solvers[self.algorithm_for(variant)]

    @property
    def default(self) -> Algorithm:
        return self._default

    @property
    def routes(self) -> dict[str, Algorithm]:
        return dict(self._routes)

    # ── Dispatch ───────────────────────────────────────────────────

    def route(
        self, grid: Sequence[Sequence[int]] | np.ndarray, variant: str
    ) -> int:
        """
        Solve *grid* with the algorithm for *variant*.

        The SEQUENCE algorithm receives the row-major flattening of the
        grid.  InvalidInputError from the grid checks or the solver
        propagates unchanged.
        """
        algorithm = self.algorithm_for(variant)
        solver = self._solvers[algorithm]
        logger.debug("Variant %r routed to %s (%r)", variant, algorithm.value, solver)

        if algorithm is Algorithm.SEQUENCE:
            return solver.solve(flatten(grid))
        return solver.solve(grid)


def route(grid: Sequence[Sequence[int]] | np.ndarray, variant: str) -> int:
    """Route with the default repertoire."""
    return SolverRouter().route(grid, variant)
