"""
VariantAssigner — deterministic, storage-free A/B assignment.

Assignment is hash-based: the same (experiment_key, unit_id) pair maps
to the same variant in every process, on every call, with no lookup
table and no runtime seed.

    key = experiment_key + "|" + unit_id
    u   = first 8 bytes of SHA-256(key) as unsigned int / 2**64
    variant = first split entry whose cumulative threshold >= u

Split order decides which variant owns a boundary value, so the split
is kept as an ordered tuple of (label, probability) pairs.
"""

from __future__ import annotations

import hashlib
import math
from typing import Iterable, Mapping

from app.core.errors import InvalidConfigurationError, InvalidInputError

SEPARATOR = "|"
SUM_TOLERANCE = 1e-9

SplitConfiguration = tuple[tuple[str, float], ...]


def _normalise_split(
    split: Mapping[str, float] | Iterable[tuple[str, float]],
) -> SplitConfiguration:
    items = split.items() if isinstance(split, Mapping) else split
    pairs: list[tuple[str, float]] = []
    seen: set[str] = set()

    for entry in items:
        try:
            label, probability = entry
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError(
                f"Split entries must be (label, probability) pairs, got {entry!r}"
            ) from exc
        if not isinstance(label, str) or not label:
            raise InvalidConfigurationError(
                f"Variant label must be a non-empty string, got {label!r}"
            )
        if label in seen:
            raise InvalidConfigurationError(f"Duplicate variant label {label!r}")
        try:
            probability = float(probability)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError(
                f"Probability for {label!r} is not a number: {probability!r}"
            ) from exc
        if not math.isfinite(probability) or probability < 0:
            raise InvalidConfigurationError(
                f"Probability for {label!r} must be finite and >= 0, "
                f"got {probability}"
            )
        seen.add(label)
        pairs.append((label, probability))

    if not pairs:
        raise InvalidConfigurationError("Variant split must not be empty")
    return tuple(pairs)


def uniform01(key: str) -> float:
    """Map *key* to a deterministic value in [0, 1] via SHA-256."""
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    # First 8 bytes as an unsigned 64-bit integer
    h = int.from_bytes(digest[:8], "big")
    return h / 2**64


class VariantAssigner:
    """
    Immutable assigner built once from a split configuration.

    Usage
    -----
    >>> assigner = VariantAssigner([("A", 0.5), ("B", 0.3), ("C", 0.2)])
    >>> assigner.choose("dungeon_game", "player123") in {"A", "B", "C"}
    True
    """

    __slots__ = ("_split", "_thresholds")

    def __init__(
        self, split: Mapping[str, float] | Iterable[tuple[str, float]]
    ) -> None:
        pairs = _normalise_split(split)

        acc = 0.0
        thresholds: list[tuple[str, float]] = []
        for label, probability in pairs:
            acc += probability
            thresholds.append((label, acc))

        if abs(acc - 1.0) > SUM_TOLERANCE:
            raise InvalidConfigurationError(
                f"Variant split must sum to 1.0, got {acc!r}"
            )
        # Pin the last boundary so every u in [0, 1] finds a variant.
        thresholds[-1] = (thresholds[-1][0], 1.0)

        object.__setattr__(self, "_split", pairs)
        object.__setattr__(self, "_thresholds", tuple(thresholds))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ── Introspection ──────────────────────────────────────────────

    @property
    def split(self) -> SplitConfiguration:
        return self._split

    @property
    def thresholds(self) -> tuple[tuple[str, float], ...]:
        """Cumulative (label, threshold) pairs in split order."""
        return self._thresholds

    @property
    def variants(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self._split)

    # ── Assignment ─────────────────────────────────────────────────

    @staticmethod
    def assignment_key(experiment_key: str, unit_id: str) -> str:
        for name, value in (("experiment_key", experiment_key), ("unit_id", unit_id)):
            if not isinstance(value, str):
                raise InvalidInputError(
                    f"{name} must be a string, got {type(value).__name__}"
                )
        return f"{experiment_key}{SEPARATOR}{unit_id}"

    def bucket(self, experiment_key: str, unit_id: str) -> float:
        """The uniform value the unit hashes to."""
        return uniform01(self.assignment_key(experiment_key, unit_id))

    def choose(self, experiment_key: str, unit_id: str) -> str:
        """Return the variant for *unit_id* within *experiment_key*."""
        u = self.bucket(experiment_key, unit_id)
        for label, threshold in self._thresholds:
            if u <= threshold:
                return label
        # Unreachable: the last threshold is pinned to 1.0.
        raise AssertionError(f"no variant for u={u!r}")

    def __repr__(self) -> str:
        split = ", ".join(f"{label}={p:g}" for label, p in self._split)
        return f"VariantAssigner({split})"


def build_assigner(
    split: Mapping[str, float] | Iterable[tuple[str, float]],
) -> VariantAssigner:
    """Validate *split* and build an assigner from it."""
    return VariantAssigner(split)


def assign(assigner: VariantAssigner, experiment_key: str, unit_id: str) -> str:
    """Functional spelling of ``assigner.choose(experiment_key, unit_id)``."""
    return assigner.choose(experiment_key, unit_id)
