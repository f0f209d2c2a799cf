"""Enhancement outcome engine.

Resolves single attempts against the fixed rule table, computes the
chance of reaching a target level, and runs bounded batches.
"""
import logging
import random
from typing import Optional

from .config import (
    ENHANCEMENT_RULES,
    ENHANCE_COST,
    MATERIAL_COST_TIERS,
    MAX_LEVEL,
    MIN_LEVEL,
)
from .exceptions import InvalidLevelError
from .models import AttemptCost, AttemptOutcome

logger = logging.getLogger(__name__)

_FLAT_COST = AttemptCost(gold=ENHANCE_COST)


def _tier_for_level(level: int) -> tuple[int, int, int]:
    for upper, amounts in MATERIAL_COST_TIERS:
        if level <= upper:
            return amounts
    return MATERIAL_COST_TIERS[-1][1]


# Pre-compute cost records for every reachable level (computed once on import)
_TIERED_COST_CACHE: dict[int, AttemptCost] = {}
for _level in range(MIN_LEVEL, MAX_LEVEL + 1):
    _stone, _ore, _dust = _tier_for_level(_level)
    _TIERED_COST_CACHE[_level] = AttemptCost(
        gold=ENHANCE_COST,
        enhancement_stone=_stone,
        refined_ore=_ore,
        mystic_dust=_dust,
    )


def attempt_cost(new_level: int, tiered: bool = True) -> AttemptCost:
    """Cost of one attempt that ended on ``new_level``.

    Secondary materials are priced by the grade of the level reached,
    not the level the attempt started from.
    """
    if not tiered:
        return _FLAT_COST
    cost = _TIERED_COST_CACHE.get(new_level)
    if cost is None:
        raise InvalidLevelError(new_level)
    return cost


def reach_target_probability(current: int, target: int) -> float:
    """Chance of going from ``current`` to ``target`` with no failures.

    This is the unbroken-chain probability (exactly ``target - current``
    attempts, all successful). Recovering after a failure is not counted.
    Returns 0.0 if the walk touches a level without a rule.
    """
    if target <= current:
        return 1.0

    chance = 1.0
    for level in range(current, target):
        rule = ENHANCEMENT_RULES.get(level)
        if rule is None:
            return 0.0
        chance *= rule.success_rate
    return chance


class EnhancementEngine:
    """Stateless resolver for enhancement attempts.

    The engine only owns its random source; current level and history
    belong to the caller.
    """

    __slots__ = ('rng', 'tiered_costs')

    def __init__(self, seed: Optional[int] = None, tiered_costs: bool = True,
                 rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)
        self.tiered_costs = tiered_costs

    def resolve_attempt(self, level: int) -> AttemptOutcome:
        """Resolve one attempt made from ``level``.

        Always draws two values (success, then damage), even on levels
        whose outcome is fixed.
        """
        rule = ENHANCEMENT_RULES.get(level)
        if rule is None:
            raise InvalidLevelError(level)

        rng_random = self.rng.random
        success = rng_random() < rule.success_rate
        damage_occurred = rng_random() < rule.damage_rate

        if success:
            new_level = min(MAX_LEVEL, level + 1)
        else:
            new_level = max(MIN_LEVEL, level + rule.failure_penalty)

        logger.debug(
            "+%d -> +%d (%s%s)", level, new_level,
            "success" if success else "fail",
            ", damaged" if damage_occurred else "",
        )
        return AttemptOutcome(
            success=success,
            new_level=new_level,
            damage_occurred=damage_occurred,
            cost=attempt_cost(new_level, self.tiered_costs),
            start_level=level,
        )

    def run_batch(
        self,
        start_level: int,
        target: int,
        max_attempts: int,
    ) -> tuple[int, list[AttemptOutcome]]:
        """Resolve attempts until target, max level, or the attempt cap.

        The stop condition is checked before every attempt, so no attempt
        is made once it already holds.

        Returns (final_level, new_outcomes).
        """
        level = start_level
        outcomes: list[AttemptOutcome] = []
        append = outcomes.append
        resolve = self.resolve_attempt

        while len(outcomes) < max_attempts and level < target and level < MAX_LEVEL:
            outcome = resolve(level)
            append(outcome)
            level = outcome.new_level

        logger.debug(
            "Batch from +%d (target +%d, cap %d) stopped at +%d after %d attempts",
            start_level, target, max_attempts, level, len(outcomes),
        )
        return level, outcomes


# Module-level engine for callers that don't need their own random source
_default_engine = EnhancementEngine()


def resolve_attempt(level: int) -> AttemptOutcome:
    """Resolve one attempt using the shared module-level engine."""
    return _default_engine.resolve_attempt(level)


def run_batch(start_level: int, target: int, max_attempts: int) -> tuple[int, list[AttemptOutcome]]:
    """Run a bounded batch using the shared module-level engine."""
    return _default_engine.run_batch(start_level, target, max_attempts)
