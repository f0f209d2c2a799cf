"""Enhancement session: current level, attempt log and driver ownership.

A session is mutated by exactly one driver at a time. Manual calls pass
no owner; the auto-enhance loop claims the session for as long as it
runs, and every other mutation is refused until it releases it.
"""
import logging
from typing import Optional

from .config import DEFAULT_TARGET_LEVEL, MAX_LEVEL, MIN_LEVEL
from .engine import EnhancementEngine, reach_target_probability
from .exceptions import SessionBusyError
from .models import AttemptOutcome, EnhancementStats
from .simulator import StatsAccumulator
from .utils import clamp_attempts, clamp_level

logger = logging.getLogger(__name__)


class EnhancementSession:
    """Tracks one gear item being enhanced."""

    def __init__(
        self,
        engine: Optional[EnhancementEngine] = None,
        target_level: int = DEFAULT_TARGET_LEVEL,
    ):
        self.engine = engine if engine is not None else EnhancementEngine()
        self.target_level = clamp_level(target_level)
        self._owner: Optional[object] = None
        self._stats = StatsAccumulator()
        self.current_level = MIN_LEVEL
        self.attempt_log: list[AttemptOutcome] = []

    # -- ownership -----------------------------------------------------

    @property
    def owner(self) -> Optional[object]:
        return self._owner

    @property
    def is_busy(self) -> bool:
        return self._owner is not None

    def claim(self, owner: object) -> None:
        """Hand control of the session to ``owner``."""
        if self._owner is not None and self._owner is not owner:
            raise SessionBusyError(self._owner)
        self._owner = owner

    def release(self, owner: object) -> None:
        if self._owner is owner:
            self._owner = None

    def _check_owner(self, owner: Optional[object]) -> None:
        if self._owner is not None and self._owner is not owner:
            raise SessionBusyError(self._owner)

    # -- derived values ------------------------------------------------

    @property
    def stats(self) -> EnhancementStats:
        return self._stats.snapshot()

    @property
    def reach_chance(self) -> float:
        """Chance of reaching the target from here without a failure."""
        return reach_target_probability(self.current_level, self.target_level)

    @property
    def at_max_level(self) -> bool:
        return self.current_level >= MAX_LEVEL

    @property
    def target_reached(self) -> bool:
        return self.current_level >= self.target_level or self.at_max_level

    # -- actions -------------------------------------------------------

    def _record(self, outcome: AttemptOutcome) -> None:
        self.attempt_log.append(outcome)
        self._stats.add(outcome)
        self.current_level = outcome.new_level

    def enhance(self, owner: Optional[object] = None) -> Optional[AttemptOutcome]:
        """Resolve one attempt at the current level.

        Returns None without attempting if the gear is already at max.
        """
        self._check_owner(owner)
        if self.at_max_level:
            return None
        outcome = self.engine.resolve_attempt(self.current_level)
        self._record(outcome)
        return outcome

    def run_batch(self, attempts: int) -> list[AttemptOutcome]:
        """Run up to ``attempts`` attempts, stopping at target or max level."""
        self._check_owner(None)
        attempts = clamp_attempts(attempts)
        final_level, outcomes = self.engine.run_batch(
            self.current_level, self.target_level, attempts
        )
        for outcome in outcomes:
            self._record(outcome)
        logger.info(
            "Batch of %d/%d attempts finished at +%d", len(outcomes), attempts, final_level
        )
        return outcomes

    def set_level(self, level: int) -> int:
        """Jump to ``level`` (clamped), keeping the attempt log."""
        self._check_owner(None)
        self.current_level = clamp_level(level)
        logger.info("Current level set to +%d", self.current_level)
        return self.current_level

    def set_target(self, level: int) -> int:
        self._check_owner(None)
        self.target_level = clamp_level(level)
        return self.target_level

    def reset(self) -> None:
        """Return to a fresh +1 item with an empty log."""
        self._check_owner(None)
        self.current_level = MIN_LEVEL
        self.attempt_log.clear()
        self._stats.reset()
        logger.info("Session reset")
