"""
Pydantic schemas for the FastAPI endpoints.

Field names are snake_case in Python and camelCase on the wire
(``playerId``, ``minHealth``) to match existing clients.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Solve ──────────────────────────────────────────────────────────

class SolveRequest(_CamelModel):
    """A player and the dungeon they are about to enter."""

    player_id: str = Field(..., alias="playerId", min_length=1)
    dungeon: list[list[StrictInt]] = Field(
        ..., description="Rectangular grid of integer health deltas, row by row"
    )


class SolveResponse(_CamelModel):
    player_id: str = Field(..., alias="playerId")
    min_health: int = Field(..., alias="minHealth", ge=1)
    variant: str


# ── Assignment ─────────────────────────────────────────────────────

class AssignmentResult(_CamelModel):
    player_id: str = Field(..., alias="playerId")
    experiment_key: str = Field(..., alias="experimentKey")
    variant: str
    algorithm: str


class ExposureEntry(_CamelModel):
    player_id: str = Field(..., alias="playerId")
    experiment_key: str = Field(..., alias="experimentKey")
    variant: str
    execution_time_ms: float = Field(..., alias="executionTimeMs")


# ── Metrics ────────────────────────────────────────────────────────

class LatencySummary(_CamelModel):
    """Latency percentiles for one solver timer."""

    timer: str
    count: int
    mean_ms: float = Field(..., alias="meanMs")
    p50_ms: float = Field(..., alias="p50Ms")
    p95_ms: float = Field(..., alias="p95Ms")
    p99_ms: float = Field(..., alias="p99Ms")
