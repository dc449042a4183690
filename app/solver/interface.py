"""
Solver Interface — abstract base for all minimum-health strategies.

Design: Strategy pattern.  The SolverRouter delegates to whichever
SolverInterface implementation a variant maps to, so a new DP variant
can be added without touching the experiment or HTTP layers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class SolverInterface(ABC):
    """
    Abstract solver that turns health deltas into a minimum starting health.
    """

    #: Timer name under which this solver's latency is recorded.
    timer_name: str = "solver.execution"

    @abstractmethod
    def solve(self, data: Any) -> int:
        """
        Compute the minimum initial health.

        Parameters
        ----------
        data : the grid or sequence of health deltas the solver accepts

        Returns
        -------
        int
            Smallest starting health (>= 1) for which health never
            drops below 1 along the traversal.

        Raises
        ------
        InvalidInputError
            If *data* is empty or malformed.
        """
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
