"""Statistics over enhancement attempt logs, with repeated-trial support."""
import logging
from typing import Iterable, Optional

from .config import MAX_LEVEL, MIN_LEVEL
from .engine import EnhancementEngine
from .models import SECONDARY_CURRENCIES, AttemptOutcome, EnhancementStats

logger = logging.getLogger(__name__)


class StatsAccumulator:
    """Running fold over attempt outcomes.

    Adding outcomes one at a time gives the same statistics as
    aggregating the whole log at once.
    """

    __slots__ = (
        'total_attempts', 'successes', 'damage_count', 'total_gold_spent',
        'materials_spent', 'last_level', 'level_hits',
    )

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Reset to the empty-log state."""
        self.total_attempts = 0
        self.successes = 0
        self.damage_count = 0
        self.total_gold_spent = 0
        self.materials_spent: dict[str, int] = {
            currency.value: 0 for currency in SECONDARY_CURRENCIES
        }
        self.last_level: Optional[int] = None
        self.level_hits: dict[int, int] = {}

    def add(self, outcome: AttemptOutcome) -> None:
        self.total_attempts += 1
        if outcome.success:
            self.successes += 1
        if outcome.damage_occurred:
            self.damage_count += 1

        cost = outcome.cost
        self.total_gold_spent += cost.gold
        materials = self.materials_spent
        for currency in SECONDARY_CURRENCIES:
            materials[currency.value] += cost.amount(currency)

        level = outcome.new_level
        self.last_level = level
        self.level_hits[level] = self.level_hits.get(level, 0) + 1

    def extend(self, outcomes: Iterable[AttemptOutcome]) -> None:
        for outcome in outcomes:
            self.add(outcome)

    def snapshot(self) -> EnhancementStats:
        """Build an independent stats record from the current totals."""
        total = self.total_attempts
        if total == 0:
            return EnhancementStats(
                materials_spent=dict(self.materials_spent),
                final_level=MIN_LEVEL,
            )

        return EnhancementStats(
            total_attempts=total,
            successes=self.successes,
            damage_count=self.damage_count,
            success_rate=self.successes / total,
            damage_rate=self.damage_count / total,
            total_gold_spent=self.total_gold_spent,
            materials_spent=dict(self.materials_spent),
            final_level=self.last_level,
            level_hits=dict(self.level_hits),
        )


def aggregate(log: Iterable[AttemptOutcome]) -> EnhancementStats:
    """Fold an ordered attempt log into summary statistics."""
    accumulator = StatsAccumulator()
    accumulator.extend(log)
    return accumulator.snapshot()


def _percentile(data: list, p: float) -> float:
    idx = int(len(data) * p)
    return data[min(idx, len(data) - 1)]


def _average(data: list) -> float:
    return sum(data) / len(data) if data else 0


def run_trials(
    start_level: int,
    target: int,
    max_attempts: int,
    num_trials: int = 1_000,
    engine: Optional[EnhancementEngine] = None,
) -> dict:
    """Run independent batches and summarise attempts and gold spent.

    Each trial starts fresh from ``start_level`` and stops under the same
    rules as a single batch run.
    """
    engine = engine if engine is not None else EnhancementEngine()
    goal = min(target, MAX_LEVEL)

    if num_trials <= 0:
        return {
            "num_trials": 0,
            "start_level": start_level,
            "target_level": target,
            "max_attempts": max_attempts,
            "reach_rate": 0.0,
            "attempts": {},
            "gold": {},
            "final_level": {},
        }

    attempts = []
    gold = []
    final_levels = []
    reached = 0

    for _ in range(num_trials):
        final_level, outcomes = engine.run_batch(start_level, target, max_attempts)
        stats = aggregate(outcomes)
        attempts.append(stats.total_attempts)
        gold.append(stats.total_gold_spent)
        final_levels.append(final_level)
        if final_level >= goal:
            reached += 1

    attempts.sort()
    gold.sort()
    final_levels.sort()

    logger.debug("Ran %d trials from +%d to +%d", num_trials, start_level, target)

    return {
        "num_trials": num_trials,
        "start_level": start_level,
        "target_level": target,
        "max_attempts": max_attempts,
        "reach_rate": reached / num_trials,
        "attempts": {
            "average": _average(attempts),
            "p50": _percentile(attempts, 0.50),
            "p90": _percentile(attempts, 0.90),
            "p99": _percentile(attempts, 0.99),
            "worst": attempts[-1],
        },
        "gold": {
            "average": _average(gold),
            "p50": _percentile(gold, 0.50),
            "p90": _percentile(gold, 0.90),
            "p99": _percentile(gold, 0.99),
            "worst": gold[-1],
        },
        "final_level": {
            "average": _average(final_levels),
            "p50": _percentile(final_levels, 0.50),
            "worst": final_levels[0],
        },
    }
