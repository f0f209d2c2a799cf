"""Gear enhancement simulator.

Resolves enhancement attempts against a fixed +1..+15 rule table and
folds attempt logs into display statistics.
"""

from .engine import (
    EnhancementEngine,
    attempt_cost,
    reach_target_probability,
    resolve_attempt,
    run_batch,
)
from .exceptions import (
    EnhanceSimError,
    InvalidLevelError,
    InvalidTargetError,
    SessionBusyError,
)
from .models import AttemptCost, AttemptOutcome, Currency, EnhancementRule, EnhancementStats
from .simulator import StatsAccumulator, aggregate, run_trials

__all__ = [
    # Engine
    "EnhancementEngine",
    "attempt_cost",
    "reach_target_probability",
    "resolve_attempt",
    "run_batch",
    # Statistics
    "StatsAccumulator",
    "aggregate",
    "run_trials",
    # Models
    "AttemptCost",
    "AttemptOutcome",
    "Currency",
    "EnhancementRule",
    "EnhancementStats",
    # Errors
    "EnhanceSimError",
    "InvalidLevelError",
    "InvalidTargetError",
    "SessionBusyError",
]
