"""Tests for deterministic variant assignment."""

import hashlib
import math

import pytest

from app.core.errors import InvalidConfigurationError, InvalidInputError
from app.experiment.assigner import (
    VariantAssigner,
    assign,
    build_assigner,
    uniform01,
)

SPLIT = [("A", 0.5), ("B", 0.3), ("C", 0.2)]


class TestConstruction:
    def test_thresholds_are_cumulative_in_order(self):
        assigner = build_assigner(SPLIT)
        labels = [label for label, _ in assigner.thresholds]
        values = [t for _, t in assigner.thresholds]
        assert labels == ["A", "B", "C"]
        assert values[0] == pytest.approx(0.5)
        assert values[1] == pytest.approx(0.8)
        assert values[2] == 1.0

    def test_mapping_keeps_insertion_order(self):
        assigner = build_assigner({"C": 0.2, "A": 0.5, "B": 0.3})
        assert assigner.variants == ("C", "A", "B")

    def test_sum_below_one_rejected(self):
        with pytest.raises(InvalidConfigurationError, match="sum to 1.0"):
            build_assigner([("A", 0.5), ("B", 0.4)])

    def test_sum_above_one_rejected(self):
        with pytest.raises(InvalidConfigurationError):
            build_assigner([("A", 0.7), ("B", 0.4)])

    def test_float_summation_error_tolerated(self):
        assigner = build_assigner([("A", 0.1)] + [(f"v{i}", 0.1) for i in range(9)])
        assert len(assigner.variants) == 10

    def test_negative_probability_rejected(self):
        with pytest.raises(InvalidConfigurationError, match=">= 0"):
            build_assigner([("A", 1.5), ("B", -0.5)])

    @pytest.mark.parametrize(
        "split",
        [
            [],
            [("A", 0.5), ("A", 0.5)],
            [("", 1.0)],
            [(1, 1.0)],
            [("A", "half"), ("B", 0.5)],
            [("A", math.nan)],
            [("A",)],
        ],
    )
    def test_malformed_split_rejected(self, split):
        with pytest.raises(InvalidConfigurationError):
            build_assigner(split)

    def test_zero_weight_variant_allowed(self):
        assigner = build_assigner([("A", 1.0), ("B", 0.0)])
        assert all(assigner.choose("exp", f"u{i}") == "A" for i in range(200))

    def test_immutable(self):
        assigner = build_assigner(SPLIT)
        with pytest.raises(AttributeError):
            assigner._thresholds = ()


class TestAssignment:
    def test_deterministic(self):
        assigner = build_assigner(SPLIT)
        assert assign(assigner, "dungeon_game", "player123") == assign(
            assigner, "dungeon_game", "player123"
        )

    def test_deterministic_across_instances(self):
        first = build_assigner(SPLIT)
        second = VariantAssigner(list(SPLIT))
        for i in range(500):
            uid = f"player_{i}"
            assert first.choose("dungeon_game", uid) == second.choose("dungeon_game", uid)

    def test_bucket_is_sha256_prefix(self):
        digest = hashlib.sha256(b"dungeon_game|player123").digest()
        expected = int.from_bytes(digest[:8], "big") / 2**64
        assigner = build_assigner(SPLIT)
        assert assigner.bucket("dungeon_game", "player123") == expected
        assert uniform01("dungeon_game|player123") == expected

    def test_bucket_in_unit_interval(self):
        assigner = build_assigner(SPLIT)
        for i in range(1000):
            assert 0.0 <= assigner.bucket("exp", str(i)) <= 1.0

    def test_distribution_follows_split(self):
        assigner = build_assigner(SPLIT)
        n = 20000
        counts = {"A": 0, "B": 0, "C": 0}
        for i in range(n):
            counts[assigner.choose("dungeon_game", f"player_{i}")] += 1
        assert abs(counts["A"] / n - 0.5) < 0.02
        assert abs(counts["B"] / n - 0.3) < 0.02
        assert abs(counts["C"] / n - 0.2) < 0.02

    def test_experiment_key_changes_assignment(self):
        assigner = build_assigner([("c", 0.5), ("t", 0.5)])
        differ = any(
            assigner.choose("exp_a", f"u{i}") != assigner.choose("exp_b", f"u{i}")
            for i in range(100)
        )
        assert differ

    def test_value_on_threshold_goes_to_that_variant(self):
        u = build_assigner(SPLIT).bucket("exp", "edge-unit")
        assigner = build_assigner([("low", u), ("high", 1.0 - u)])
        assert assigner.thresholds[0][1] == u
        assert assigner.choose("exp", "edge-unit") == "low"

    def test_value_just_above_threshold_goes_to_next_variant(self):
        u = build_assigner(SPLIT).bucket("exp", "edge-unit")
        below = math.nextafter(u, 0.0)
        assigner = build_assigner([("low", below), ("high", 1.0 - below)])
        assert assigner.choose("exp", "edge-unit") == "high"

    def test_only_split_labels_returned(self):
        assigner = build_assigner(SPLIT)
        for i in range(300):
            assert assigner.choose("exp", f"u{i}") in {"A", "B", "C"}

    @pytest.mark.parametrize("experiment_key, unit_id", [("exp", None), (None, "u")])
    def test_non_string_ids_rejected(self, experiment_key, unit_id):
        with pytest.raises(InvalidInputError):
            build_assigner(SPLIT).choose(experiment_key, unit_id)

    def test_ids_containing_separator_are_assigned(self):
        """Keys are concatenated as-is, separator included."""
        assigner = build_assigner(SPLIT)
        digest = hashlib.sha256(b"dungeon_game|team|42").digest()
        expected = int.from_bytes(digest[:8], "big") / 2**64
        assert assigner.bucket("dungeon_game", "team|42") == expected
        assert assigner.choose("dungeon_game", "team|42") in {"A", "B", "C"}

    def test_empty_ids_are_valid(self):
        assert build_assigner(SPLIT).choose("", "") in {"A", "B", "C"}
