"""Enhancement configuration and probability tables.

The rule table is fixed for this game and is not meant to be edited at
runtime. Levels run from +1 (fresh gear) to +15 (maximum).
"""
from dataclasses import dataclass
from typing import Optional

from .models import EnhancementRule

MIN_LEVEL: int = 1
MAX_LEVEL: int = 15

# Per-level rules, keyed by the level the attempt is made FROM
# successRate / damageRate / levels lost on failure
ENHANCEMENT_RULES: dict[int, EnhancementRule] = {
    1: EnhancementRule(success_rate=1.00, damage_rate=0.00, failure_penalty=0),
    2: EnhancementRule(success_rate=1.00, damage_rate=0.00, failure_penalty=0),
    3: EnhancementRule(success_rate=1.00, damage_rate=0.00, failure_penalty=0),
    4: EnhancementRule(success_rate=1.00, damage_rate=0.00, failure_penalty=0),
    5: EnhancementRule(success_rate=1.00, damage_rate=0.00, failure_penalty=0),
    6: EnhancementRule(success_rate=1.00, damage_rate=0.00, failure_penalty=0),
    7: EnhancementRule(success_rate=0.45, damage_rate=0.25, failure_penalty=-1),
    8: EnhancementRule(success_rate=0.40, damage_rate=0.25, failure_penalty=-2),
    9: EnhancementRule(success_rate=0.35, damage_rate=0.25, failure_penalty=0),
    10: EnhancementRule(success_rate=0.30, damage_rate=0.25, failure_penalty=-1),
    11: EnhancementRule(success_rate=0.25, damage_rate=0.25, failure_penalty=-2),
    12: EnhancementRule(success_rate=0.20, damage_rate=0.25, failure_penalty=-2),
    13: EnhancementRule(success_rate=0.15, damage_rate=0.25, failure_penalty=-2),
    14: EnhancementRule(success_rate=0.05, damage_rate=0.25, failure_penalty=-2),
    15: EnhancementRule(success_rate=0.01, damage_rate=0.25, failure_penalty=-2),
}

# Gold spent per attempt, regardless of outcome
ENHANCE_COST: int = 75

# Secondary material costs per attempt
# Format: (highest_resulting_level, (enhancement_stone, refined_ore, mystic_dust))
# Keyed by the level the gear ENDS on after the attempt
MATERIAL_COST_TIERS: tuple[tuple[int, tuple[int, int, int]], ...] = (
    (3, (18, 1, 1)),
    (6, (18, 2, 2)),
    (10, (18, 3, 2)),
    (13, (18, 4, 3)),
    (14, (18, 5, 4)),
    (15, (24, 6, 6)),
)

# Auto-enhance fires one attempt per interval (seconds)
AUTO_ENHANCE_INTERVAL: float = 0.1

DEFAULT_TARGET_LEVEL: int = MAX_LEVEL
DEFAULT_BATCH_ATTEMPTS: int = 100


@dataclass(slots=True)
class SimConfig:
    """Settings for one simulator run (CLI or TUI)."""
    target_level: int = DEFAULT_TARGET_LEVEL
    start_level: int = MIN_LEVEL
    batch_attempts: int = DEFAULT_BATCH_ATTEMPTS
    tiered_costs: bool = True
    seed: Optional[int] = None
    auto_interval: float = AUTO_ENHANCE_INTERVAL
