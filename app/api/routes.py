"""
FastAPI routes for the dungeon service.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from app.api.schemas import (
    AssignmentResult,
    ExposureEntry,
    LatencySummary,
    SolveRequest,
    SolveResponse,
)
from app.core.config import DungeonConfig
from app.core.errors import InvalidInputError
from app.engine.dungeon_engine import DungeonEngine
from app.ledger.ledger import ExperimentLedger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dungeon")

# ── Shared instances ───────────────────────────────────────────────

config = DungeonConfig.from_env()
ledger = ExperimentLedger(maxlen=config.ledger_maxlen)
engine = DungeonEngine.from_config(config, ledger=ledger)


# ── Solve ──────────────────────────────────────────────────────────

@router.post("/solve", response_model=SolveResponse)
async def solve_dungeon(payload: SolveRequest) -> SolveResponse:
    """
    Assign the player to a variant and return the minimum health the
    variant's solver computes for the dungeon.
    """
    try:
        result = engine.solve(payload.player_id, payload.dungeon)
    except InvalidInputError as exc:
        logger.warning("Rejected solve for %r: %s", payload.player_id, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    return SolveResponse(
        player_id=result["player_id"],
        min_health=result["min_health"],
        variant=result["variant"],
    )


# ── Assignment ─────────────────────────────────────────────────────

@router.get("/variant/{player_id}", response_model=AssignmentResult)
async def get_variant(player_id: str) -> AssignmentResult:
    """Which variant (and algorithm) a player is assigned to."""
    return AssignmentResult(**engine.assign(player_id))


@router.get("/exposures", response_model=list[ExposureEntry])
async def list_exposures(player_id: str | None = None) -> list[ExposureEntry]:
    """Exposures recorded since start-up, optionally for one player."""
    return [
        ExposureEntry(**ledger.as_dict(e)) for e in ledger.exposures(player_id)
    ]


# ── Metrics ────────────────────────────────────────────────────────

@router.get("/metrics", response_model=list[LatencySummary])
async def latency_metrics() -> list[LatencySummary]:
    """Per-solver latency percentiles."""
    return [LatencySummary(**s) for s in ledger.latency_summary()]
