"""
Dungeon Core — Minimum-health solver with A/B strategy routing
===============================================================

FastAPI entry point.
Start with:  uvicorn main:app --reload
"""

import logging

from fastapi import FastAPI

from app.api.routes import router

# ── Logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── App ────────────────────────────────────────────────────────────
app = FastAPI(
    title="Dungeon Core",
    description=(
        "Computes the minimum initial health needed to cross a dungeon "
        "grid, routing each player to a solver variant through a "
        "deterministic hash-based experiment assignment."
    ),
    version="0.1.0",
)

# Mount all routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "Dungeon Core",
        "version": "0.1.0",
        "status": "running",
        "docs": "/docs",
    }
