"""
Unit tests for simulator.py - log aggregation and repeated trials.
"""
import pytest

from enhance_sim.config import ENHANCE_COST
from enhance_sim.engine import EnhancementEngine, attempt_cost
from enhance_sim.models import AttemptCost, AttemptOutcome, Currency, EnhancementStats
from enhance_sim.simulator import StatsAccumulator, aggregate, run_trials


def make_outcome(success: bool, new_level: int, damage: bool = False, tiered: bool = True) -> AttemptOutcome:
    return AttemptOutcome(
        success=success,
        new_level=new_level,
        damage_occurred=damage,
        cost=attempt_cost(new_level, tiered),
        start_level=max(1, new_level - 1) if success else new_level,
    )


class TestAggregateEmpty:
    """Tests for the empty-log baseline."""

    def test_zeroed_stats(self):
        stats = aggregate([])
        assert stats.total_attempts == 0
        assert stats.final_level == 1
        assert stats.success_rate == 0
        assert stats.damage_rate == 0
        assert stats.total_gold_spent == 0
        assert stats.level_hits == {}

    def test_material_totals_are_zero(self):
        stats = aggregate([])
        assert stats.material(Currency.ENHANCEMENT_STONE) == 0
        assert stats.material(Currency.REFINED_ORE) == 0
        assert stats.material(Currency.MYSTIC_DUST) == 0


class TestAggregate:
    """Tests for folding a log into statistics."""

    @pytest.fixture
    def log(self):
        return [
            make_outcome(True, 8),
            make_outcome(False, 6, damage=True),
            make_outcome(True, 7),
            make_outcome(True, 8, damage=True),
        ]

    def test_counts(self, log):
        stats = aggregate(log)
        assert stats.total_attempts == 4
        assert stats.successes == 3
        assert stats.failures == 1
        assert stats.damage_count == 2

    def test_rates(self, log):
        stats = aggregate(log)
        assert stats.success_rate == 0.75
        assert stats.damage_rate == 0.5

    def test_gold_is_per_attempt(self, log):
        assert aggregate(log).total_gold_spent == 4 * ENHANCE_COST

    def test_materials_keyed_by_each_new_level(self, log):
        """+8 and +7 are the 7-10 tier, +6 is the 4-6 tier."""
        stats = aggregate(log)
        assert stats.material(Currency.ENHANCEMENT_STONE) == 18 * 4
        assert stats.material(Currency.REFINED_ORE) == 3 + 2 + 3 + 3
        assert stats.material(Currency.MYSTIC_DUST) == 2 + 2 + 2 + 2

    def test_materials_use_recorded_cost(self):
        """Totals come from the stored cost, not from the current level."""
        outcome = AttemptOutcome(
            success=True,
            new_level=15,
            damage_occurred=False,
            cost=AttemptCost(gold=10, enhancement_stone=1, refined_ore=2, mystic_dust=3),
            start_level=14,
        )
        stats = aggregate([outcome, outcome])
        assert stats.total_gold_spent == 20
        assert stats.materials_spent == {
            "enhancement_stone": 2,
            "refined_ore": 4,
            "mystic_dust": 6,
        }

    def test_simple_variant_has_no_materials(self):
        stats = aggregate([make_outcome(True, 2, tiered=False), make_outcome(True, 3, tiered=False)])
        assert stats.total_gold_spent == 2 * ENHANCE_COST
        assert stats.material(Currency.REFINED_ORE) == 0

    def test_final_level_is_last_entry(self, log):
        assert aggregate(log).final_level == 8

    def test_level_hits(self, log):
        assert aggregate(log).level_hits == {8: 2, 6: 1, 7: 1}

    def test_gold_via_material_lookup(self, log):
        stats = aggregate(log)
        assert stats.material(Currency.GOLD) == stats.total_gold_spent

    def test_accepts_any_iterable(self, log):
        assert aggregate(iter(log)) == aggregate(log)


class TestPureFold:
    """aggregate() has no hidden state and folds incrementally."""

    @pytest.fixture
    def log(self):
        _, outcomes = EnhancementEngine(seed=42).run_batch(1, 15, 300)
        return outcomes

    def test_same_log_same_stats(self, log):
        assert aggregate(log) == aggregate(log)

    def test_does_not_mutate_log(self, log):
        before = list(log)
        aggregate(log)
        assert log == before

    def test_adding_one_entry(self, log):
        accumulator = StatsAccumulator()
        accumulator.extend(log[:-1])
        prefix = accumulator.snapshot()
        accumulator.add(log[-1])
        full = accumulator.snapshot()

        assert full == aggregate(log)
        assert prefix == aggregate(log[:-1])
        assert full.total_attempts == prefix.total_attempts + 1
        assert full.total_gold_spent == prefix.total_gold_spent + log[-1].cost.gold
        assert full.successes == prefix.successes + int(log[-1].success)
        assert full.final_level == log[-1].new_level

    def test_snapshot_is_independent(self, log):
        accumulator = StatsAccumulator()
        accumulator.extend(log)
        stats = accumulator.snapshot()
        stats.level_hits.clear()
        stats.materials_spent.clear()
        assert accumulator.snapshot() == aggregate(log)

    def test_reset_matches_empty(self, log):
        accumulator = StatsAccumulator()
        accumulator.extend(log)
        accumulator.reset()
        assert accumulator.snapshot() == aggregate([])


class TestRunTrials:
    """Tests for repeated-trial summaries."""

    def test_deterministic_path_always_reaches(self):
        summary = run_trials(1, 7, 100, num_trials=50, engine=EnhancementEngine(seed=1))
        assert summary["num_trials"] == 50
        assert summary["reach_rate"] == 1.0
        assert summary["attempts"]["average"] == 6
        assert summary["attempts"]["worst"] == 6
        assert summary["gold"]["p50"] == 6 * ENHANCE_COST

    def test_cap_limits_attempts(self):
        summary = run_trials(1, 15, 20, num_trials=100, engine=EnhancementEngine(seed=2))
        assert summary["attempts"]["worst"] <= 20
        assert 0.0 <= summary["reach_rate"] <= 1.0

    def test_percentiles_ordered(self):
        summary = run_trials(7, 12, 500, num_trials=200, engine=EnhancementEngine(seed=5))
        attempts = summary["attempts"]
        assert attempts["p50"] <= attempts["p90"] <= attempts["p99"] <= attempts["worst"]

    def test_zero_trials(self):
        summary = run_trials(1, 15, 100, num_trials=0)
        assert summary["num_trials"] == 0
        assert summary["reach_rate"] == 0.0
        assert summary["attempts"] == {}


class TestEnhancementStats:
    """Tests for the stats record defaults."""

    def test_default_matches_empty_baseline(self):
        stats = EnhancementStats()
        assert stats.final_level == 1
        assert stats.failures == 0
