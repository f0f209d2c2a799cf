"""Data models for gear enhancement simulation."""
from dataclasses import dataclass, field
from enum import Enum


class Currency(Enum):
    """Currencies spent on enhancement attempts."""
    GOLD = "gold"                              # primary, flat per attempt
    ENHANCEMENT_STONE = "enhancement_stone"    # secondary A
    REFINED_ORE = "refined_ore"                # secondary B
    MYSTIC_DUST = "mystic_dust"                # secondary C


SECONDARY_CURRENCIES: tuple[Currency, ...] = (
    Currency.ENHANCEMENT_STONE,
    Currency.REFINED_ORE,
    Currency.MYSTIC_DUST,
)


@dataclass(frozen=True, slots=True)
class EnhancementRule:
    """Success/damage/penalty rule for attempts made from one level."""
    success_rate: float
    damage_rate: float
    failure_penalty: int


@dataclass(frozen=True, slots=True)
class AttemptCost:
    """Currency amounts spent on a single attempt."""
    gold: int = 0
    enhancement_stone: int = 0
    refined_ore: int = 0
    mystic_dust: int = 0

    def amount(self, currency: Currency) -> int:
        return getattr(self, currency.value)

    def as_dict(self) -> dict[str, int]:
        return {currency.value: self.amount(currency) for currency in Currency}


@dataclass(frozen=True, slots=True)
class AttemptOutcome:
    """Result of a single enhancement attempt."""
    success: bool
    new_level: int
    damage_occurred: bool
    cost: AttemptCost
    start_level: int


@dataclass(slots=True)
class EnhancementStats:
    """Summary statistics over an attempt log.

    Attributes:
        total_attempts: Number of attempts in the log
        successes: Attempts that raised the level
        damage_count: Attempts with the damage flag set
        success_rate: successes / total_attempts (0.0 when empty)
        damage_rate: damage_count / total_attempts (0.0 when empty)
        total_gold_spent: Sum of recorded gold costs
        materials_spent: Secondary currency totals keyed by currency value
        final_level: Level after the last attempt (1 when empty)
        level_hits: How many attempts ended on each level
    """
    total_attempts: int = 0
    successes: int = 0
    damage_count: int = 0
    success_rate: float = 0.0
    damage_rate: float = 0.0
    total_gold_spent: int = 0
    materials_spent: dict[str, int] = field(default_factory=dict)
    final_level: int = 1
    level_hits: dict[int, int] = field(default_factory=dict)

    @property
    def failures(self) -> int:
        return self.total_attempts - self.successes

    def material(self, currency: Currency) -> int:
        if currency is Currency.GOLD:
            return self.total_gold_spent
        return self.materials_spent.get(currency.value, 0)
