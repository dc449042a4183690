"""
Runtime configuration for the dungeon service.

Defaults reproduce the production experiment (``dungeon_game`` with an
A/B/C split of 50/30/20, variant A on the single-path solver).  Each
field can be overridden through the environment:

    DUNGEON_EXPERIMENT_KEY     dungeon_game
    DUNGEON_SPLIT              A:0.5,B:0.3,C:0.2
    DUNGEON_SEQUENCE_VARIANTS  A
    DUNGEON_LEDGER_MAXLEN      10000
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from app.core.errors import InvalidConfigurationError

DEFAULT_EXPERIMENT_KEY = "dungeon_game"
DEFAULT_SPLIT: tuple[tuple[str, float], ...] = (("A", 0.5), ("B", 0.3), ("C", 0.2))
DEFAULT_SEQUENCE_VARIANTS: tuple[str, ...] = ("A",)
DEFAULT_LEDGER_MAXLEN = 10_000


def parse_split(raw: str) -> tuple[tuple[str, float], ...]:
    """Parse ``"A:0.5,B:0.3,C:0.2"`` into ordered (label, probability) pairs."""
    pairs: list[tuple[str, float]] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        label, sep, value = chunk.partition(":")
        if not sep:
            raise InvalidConfigurationError(
                f"Split entry {chunk!r} must look like 'label:probability'"
            )
        try:
            pairs.append((label.strip(), float(value)))
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Split entry {chunk!r} has a non-numeric probability"
            ) from exc
    return tuple(pairs)


def _parse_labels(raw: str) -> tuple[str, ...]:
    return tuple(label.strip() for label in raw.split(",") if label.strip())


@dataclass(frozen=True)
class DungeonConfig:
    experiment_key: str = DEFAULT_EXPERIMENT_KEY
    # Ordered: the order fixes the cumulative thresholds
    split: tuple[tuple[str, float], ...] = DEFAULT_SPLIT
    # Variants that run the flattened single-path solver
    sequence_variants: tuple[str, ...] = DEFAULT_SEQUENCE_VARIANTS
    # Rolling window size of the in-memory ledger
    ledger_maxlen: int = DEFAULT_LEDGER_MAXLEN

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DungeonConfig":
        env = os.environ if environ is None else environ
        experiment_key = env.get("DUNGEON_EXPERIMENT_KEY", DEFAULT_EXPERIMENT_KEY).strip()
        if not experiment_key:
            raise InvalidConfigurationError("DUNGEON_EXPERIMENT_KEY must not be empty")

        split = DEFAULT_SPLIT
        if env.get("DUNGEON_SPLIT"):
            split = parse_split(env["DUNGEON_SPLIT"])

        sequence_variants = DEFAULT_SEQUENCE_VARIANTS
        if "DUNGEON_SEQUENCE_VARIANTS" in env:
            sequence_variants = _parse_labels(env["DUNGEON_SEQUENCE_VARIANTS"])

        ledger_maxlen = DEFAULT_LEDGER_MAXLEN
        if env.get("DUNGEON_LEDGER_MAXLEN"):
            try:
                ledger_maxlen = int(env["DUNGEON_LEDGER_MAXLEN"])
            except ValueError as exc:
                raise InvalidConfigurationError(
                    "DUNGEON_LEDGER_MAXLEN must be an integer"
                ) from exc
            if ledger_maxlen < 1:
                raise InvalidConfigurationError("DUNGEON_LEDGER_MAXLEN must be >= 1")

        return cls(
            experiment_key=experiment_key,
            split=split,
            sequence_variants=sequence_variants,
            ledger_maxlen=ledger_maxlen,
        )
