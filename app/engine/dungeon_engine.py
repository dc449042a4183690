"""
DungeonEngine — Top-level orchestrator.

Assigns the player to a variant, routes the dungeon to that variant's
solver, times the solve, and writes the exposure and solution into the
ledger.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Sequence

from app.core.config import DungeonConfig
from app.experiment.assigner import VariantAssigner
from app.ledger.ledger import ExperimentLedger, ExposureRecord, SolutionRecord
from app.solver.router import Algorithm, SolverRouter

logger = logging.getLogger(__name__)


class DungeonEngine:
    """
    Main entry-point for solve requests.

    Usage
    -----
    >>> engine = DungeonEngine.from_config(DungeonConfig())
    >>> result = engine.solve("player123", [[-2, -3, 3], [-5, -10, 1], [10, 30, -5]])
    >>> result["variant"] in {"A", "B", "C"}
    True
    """

    def __init__(
        self,
        assigner: VariantAssigner,
        router: SolverRouter,
        experiment_key: str,
        ledger: ExperimentLedger | None = None,
    ) -> None:
        self.assigner = assigner
        self.router = router
        self.experiment_key = experiment_key
        self.ledger = ledger if ledger is not None else ExperimentLedger()

    @classmethod
    def from_config(
        cls, config: DungeonConfig, ledger: ExperimentLedger | None = None
    ) -> "DungeonEngine":
        """Build the assigner and router described by *config*."""
        routes = {
            label: (
                Algorithm.SEQUENCE
                if label in config.sequence_variants
                else Algorithm.GRID
            )
            for label, _ in config.split
        }
        return cls(
            assigner=VariantAssigner(config.split),
            router=SolverRouter(routes=routes),
            experiment_key=config.experiment_key,
            ledger=ledger,
        )

    # ── Public API ─────────────────────────────────────────────────

    def assign(self, player_id: str) -> dict[str, Any]:
        """Look up a player's variant without solving anything."""
        variant = self.assigner.choose(self.experiment_key, player_id)
        return {
            "player_id": player_id,
            "experiment_key": self.experiment_key,
            "variant": variant,
            "algorithm": self.router.algorithm_for(variant).value,
        }

    def solve(
        self, player_id: str, dungeon: Sequence[Sequence[int]]
    ) -> dict[str, Any]:
        """
        Solve *dungeon* for *player_id* under the player's variant.

        Returns
        -------
        dict with keys: player_id, min_health, variant, algorithm,
        execution_time_ms

        Raises
        ------
        InvalidInputError
            If the player id or dungeon is malformed.  Nothing is
            recorded in that case.
        """
        variant = self.assigner.choose(self.experiment_key, player_id)
        solver = self.router.solver_for(variant)

        start = time.perf_counter_ns()
        min_health = self.router.route(dungeon, variant)
        execution_time_ms = (time.perf_counter_ns() - start) / 1_000_000

        self.ledger.record(
            ExposureRecord(player_id, self.experiment_key, variant, execution_time_ms),
            SolutionRecord(player_id, min_health, variant),
            solver.timer_name,
        )

        logger.info(
            "Solved dungeon: player=%s variant=%s min_health=%d time=%.3fms",
            player_id, variant, min_health, execution_time_ms,
        )

        return {
            "player_id": player_id,
            "min_health": min_health,
            "variant": variant,
            "algorithm": self.router.algorithm_for(variant).value,
            "execution_time_ms": execution_time_ms,
        }
