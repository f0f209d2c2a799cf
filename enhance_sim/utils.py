"""Utility functions for input clamping, formatting and display."""
from .config import MAX_LEVEL, MIN_LEVEL


def clamp_level(level: int) -> int:
    """Clamp a user-supplied level into the valid 1-15 range."""
    return min(MAX_LEVEL, max(MIN_LEVEL, level))


def clamp_attempts(attempts: int) -> int:
    """Attempt counts are at least 1."""
    return max(1, attempts)


def parse_int(value: str, default: int) -> int:
    """Parse an integer from free text, falling back to ``default``."""
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return default


def format_gold(gold: float) -> str:
    """Format a gold amount with K/M/B suffix."""
    if gold >= 1_000_000_000:
        return f"{gold / 1_000_000_000:.1f}B"
    if gold >= 1_000_000:
        return f"{gold / 1_000_000:.1f}M"
    if gold >= 1_000:
        return f"{gold / 1_000:.1f}K"
    return f"{gold:,.0f}"


def format_percent(rate: float, digits: int = 1) -> str:
    """Format a 0-1 rate as a percentage string."""
    return f"{rate * 100:.{digits}f}%"
