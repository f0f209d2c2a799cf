"""Timer-driven auto-enhance loop.

Fires one attempt per interval until the session reaches its target or
max level, or until stopped. A stop request lands before the next
attempt; an attempt that has already resolved is never undone.
"""
import asyncio
import logging
from typing import Callable, Optional

from .config import AUTO_ENHANCE_INTERVAL, MAX_LEVEL
from .exceptions import InvalidTargetError
from .models import AttemptOutcome
from .session import EnhancementSession

logger = logging.getLogger(__name__)


class AutoEnhancer:
    """Background driver that repeatedly enhances a session."""

    def __init__(
        self,
        session: EnhancementSession,
        interval: float = AUTO_ENHANCE_INTERVAL,
        on_attempt: Optional[Callable[[AttemptOutcome], None]] = None,
        on_finish: Optional[Callable[[], None]] = None,
    ):
        self.session = session
        self.interval = interval
        self.on_attempt = on_attempt
        self.on_finish = on_finish
        self.running = False
        self._task: Optional[asyncio.Task] = None

    def _should_continue(self) -> bool:
        session = self.session
        return (
            self.running
            and session.current_level < session.target_level
            and session.current_level < MAX_LEVEL
        )

    def __repr__(self) -> str:
        state = "running" if self.running else "stopping" if self.is_active else "idle"
        return f"auto-enhance (target +{self.session.target_level}, {state})"

    @property
    def is_active(self) -> bool:
        """True while a loop task exists that has not finished, even after stop()."""
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Claim the session and start the loop on the running event loop.

        Raises RuntimeError when no event loop is running, or when a previous
        loop of this driver has not finished yet.
        """
        if self.running or self.is_active:
            raise RuntimeError("Auto-enhance is already running")
        loop = asyncio.get_running_loop()

        session = self.session
        if session.target_level > MAX_LEVEL:
            raise InvalidTargetError(
                session.current_level, session.target_level,
                f"Target level cannot exceed {MAX_LEVEL}",
            )
        if session.target_level <= session.current_level:
            raise InvalidTargetError(session.current_level, session.target_level)

        session.claim(self)
        self.running = True
        logger.info(
            "Auto-enhance started at +%d (target +%d)",
            session.current_level, session.target_level,
        )
        self._task = loop.create_task(self._run())
        return self._task

    def stop(self) -> None:
        """Request a stop; takes effect before the next attempt."""
        if self.running:
            logger.info("Auto-enhance stop requested at +%d", self.session.current_level)
        self.running = False

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _run(self) -> None:
        session = self.session
        attempts = 0
        try:
            while True:
                await asyncio.sleep(self.interval)
                if not self._should_continue():
                    break
                outcome = session.enhance(owner=self)
                if outcome is None:
                    break
                attempts += 1
                if self.on_attempt is not None:
                    self.on_attempt(outcome)
        finally:
            self.running = False
            session.release(self)
            logger.info(
                "Auto-enhance finished at +%d after %d attempts",
                session.current_level, attempts,
            )
            if self.on_finish is not None:
                self.on_finish()
