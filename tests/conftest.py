"""
pytest configuration and shared fixtures
"""
import sys
from pathlib import Path

import pytest

# Make the project importable without installing it
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from enhance_sim.engine import EnhancementEngine  # noqa: E402
from enhance_sim.session import EnhancementSession  # noqa: E402


class ScriptedRandom:
    """Stand-in random source that returns a fixed sequence of draws."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def engine() -> EnhancementEngine:
    """Seeded engine with tiered material costs."""
    return EnhancementEngine(seed=1234)


@pytest.fixture
def scripted_engine():
    """Factory for engines driven by a scripted random sequence."""

    def _make(values, tiered_costs: bool = True):
        rng = ScriptedRandom(values)
        return EnhancementEngine(rng=rng, tiered_costs=tiered_costs), rng

    return _make


@pytest.fixture
def session(engine) -> EnhancementSession:
    return EnhancementSession(engine=engine)
