"""Unit prices and the PHP conversion used for display.

All prices are in gold. The PHP figure is a fixed-rate display value
only and is never stored back into a session.
"""
from .models import SECONDARY_CURRENCIES, Currency, EnhancementStats

# Gold value of one unit of each secondary material
MARKET_PRICES: dict[str, int] = {
    Currency.ENHANCEMENT_STONE.value: 5,
    Currency.REFINED_ORE.value: 25,
    Currency.MYSTIC_DUST.value: 40,
}

# PHP per gold
PHP_EXCHANGE_RATE: float = 0.7


def gold_value(stats: EnhancementStats) -> int:
    """Total spend expressed in gold, materials included."""
    total = stats.total_gold_spent
    for currency in SECONDARY_CURRENCIES:
        total += stats.material(currency) * MARKET_PRICES.get(currency.value, 0)
    return total


def monetary_equivalent(stats: EnhancementStats) -> float:
    """PHP equivalent of everything spent in ``stats``."""
    return gold_value(stats) * PHP_EXCHANGE_RATE
