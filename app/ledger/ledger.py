"""
ExperimentLedger — In-memory log of exposures, solutions and solver timings.

An exposure records that a player saw a variant; a solution records what
the routed solver answered.  Latency samples are grouped by the solver's
timer name so the two DP strategies can be compared side by side.
"""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from app.core.config import DEFAULT_LEDGER_MAXLEN

PERCENTILES = (50, 95, 99)


@dataclass(frozen=True)
class ExposureRecord:
    player_id: str
    experiment_key: str
    variant: str
    execution_time_ms: float


@dataclass(frozen=True)
class SolutionRecord:
    player_id: str
    min_health: int
    variant: str


class ExperimentLedger:
    """
    In-memory store for experiment records.

    Exposures, solutions and each timer's latency samples are rolling
    windows of at most *maxlen* entries; the oldest entries are evicted
    first.
    """

    def __init__(self, maxlen: int = DEFAULT_LEDGER_MAXLEN) -> None:
        if maxlen < 1:
            raise ValueError(f"maxlen must be >= 1, got {maxlen}")
        self._maxlen = maxlen
        self._exposures: deque[ExposureRecord] = deque(maxlen=maxlen)
        self._solutions: deque[SolutionRecord] = deque(maxlen=maxlen)
        self._timings: dict[str, deque[float]] = {}

    @property
    def maxlen(self) -> int:
        return self._maxlen

    def record(
        self,
        exposure: ExposureRecord,
        solution: SolutionRecord,
        timer_name: str,
    ) -> None:
        """Store one solved request and its latency sample."""
        self._exposures.append(exposure)
        self._solutions.append(solution)
        samples = self._timings.setdefault(timer_name, deque(maxlen=self._maxlen))
        samples.append(exposure.execution_time_ms)

    def exposures(self, player_id: str | None = None) -> list[ExposureRecord]:
        if player_id is None:
            return list(self._exposures)
        return [e for e in self._exposures if e.player_id == player_id]

    def solutions(self, player_id: str | None = None) -> list[SolutionRecord]:
        if player_id is None:
            return list(self._solutions)
        return [s for s in self._solutions if s.player_id == player_id]

    def latency_summary(self) -> list[dict[str, Any]]:
        """
        Summarise recorded latencies per timer.

        Returns
        -------
        list of dicts with: timer, count, mean_ms, p50_ms, p95_ms, p99_ms
        """
        summaries: list[dict[str, Any]] = []
        for timer, samples in sorted(self._timings.items()):
            values = np.asarray(list(samples), dtype=np.float64)
            p50, p95, p99 = np.percentile(values, PERCENTILES)
            summaries.append({
                "timer": timer,
                "count": int(values.size),
                "mean_ms": float(values.mean()),
                "p50_ms": float(p50),
                "p95_ms": float(p95),
                "p99_ms": float(p99),
            })
        return summaries

    def clear(self) -> None:
        self._exposures.clear()
        self._solutions.clear()
        self._timings.clear()

    @staticmethod
    def as_dict(record: ExposureRecord | SolutionRecord) -> dict[str, Any]:
        return asdict(record)

    def __len__(self) -> int:
        return len(self._exposures)
