from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from dustsweeper.session import GameSession

logger = logging.getLogger(__name__)


class TickScheduler:
    """Drives passive accrual from wall-clock time.

    Ticks run between actions, never during one, so the session needs no
    locking.
    """

    def __init__(
        self,
        session: GameSession,
        interval: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session
        self.interval = interval if interval is not None else session.engine.config.tick_interval
        if self.interval <= 0:
            raise ValueError("interval must be positive")
        self._sleep = sleep
        self._stopped = False
        self.tick_count = 0

    def tick(self) -> float:
        """Credit production for the time since the last tick. Returns the gain."""
        state = self.session.state
        now = self.session.now_ms()
        delta = (now - state.last_update) / 1000
        state.last_update = now
        if delta <= 0:
            return 0.0
        self.tick_count += 1
        gained = self.session.tick(delta)
        logger.debug("Tick %d: %.3fs -> %.2f", self.tick_count, delta, gained)
        return gained

    def stop(self) -> None:
        self._stopped = True

    def run(
        self,
        duration: float | None = None,
        autosave_every: float | None = None,
    ) -> None:
        """Tick every interval until stopped or *duration* seconds have passed."""
        self._stopped = False
        start = self.session.clock()
        last_save = start
        logger.info("Tick loop started (interval=%.3fs)", self.interval)
        while not self._stopped:
            self._sleep(self.interval)
            self.tick()
            now = self.session.clock()
            if autosave_every is not None and now - last_save >= autosave_every:
                self.session.save()
                last_save = now
            if duration is not None and now - start >= duration:
                break
        logger.info("Tick loop stopped after %d ticks", self.tick_count)
