from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from dustsweeper.achievement import AchievementDef
from dustsweeper.catalog import Catalog
from dustsweeper.engine import EconomyEngine
from dustsweeper.errors import InsufficientFunds, PersistenceFailure
from dustsweeper.evaluator import AchievementEvaluator
from dustsweeper.formatting import format_number
from dustsweeper.persistence import KeyValueStore, LoadResult, MemoryStore, Persistence
from dustsweeper.prestige import PrestigeResult
from dustsweeper.state import ProgressionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """A user-visible message produced by an action."""

    message: str
    level: str = "info"  # "info", "success" or "warn"


class GameSession:
    """Player-facing entry points over one engine.

    Each action runs to completion: the engine mutation, then the
    achievement check, then notices. Recoverable errors become notices.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        store: KeyValueStore | None = None,
        clock: Callable[[], float] = time.time,
        max_notices: int = 50,
    ) -> None:
        self.engine = EconomyEngine(catalog)
        self.evaluator = AchievementEvaluator(self.engine)
        self.persistence = Persistence(
            store if store is not None else MemoryStore(),
            key=self.engine.config.save_key,
        )
        self.clock = clock
        self.notices: deque[Notice] = deque(maxlen=max_notices)
        self.engine.state.last_update = self.now_ms()

    @property
    def state(self) -> ProgressionState:
        return self.engine.state

    @property
    def catalog(self) -> Catalog:
        return self.engine.catalog

    def now_ms(self) -> int:
        return int(self.clock() * 1000)

    # ── Notices ──────────────────────────────────────────────────────

    def notify(self, message: str, level: str = "info") -> None:
        self.notices.append(Notice(message, level))

    def drain_notices(self) -> list[Notice]:
        notices = list(self.notices)
        self.notices.clear()
        return notices

    # ── Actions ──────────────────────────────────────────────────────

    def click(self) -> float:
        gained = self.engine.handle_click()
        self._check_achievements()
        return gained

    def buy_tool(self, tool_id: str) -> bool:
        try:
            ts = self.engine.buy_tool(tool_id)
        except InsufficientFunds:
            self.notify("Not enough dust.", "warn")
            return False
        self._check_achievements()
        tdef = self.catalog.get_tool(tool_id)
        self.notify(f"{tdef.display_name} upgraded to Lv.{ts.level}.", "success")
        return True

    def buy_upgrade(self, tool_id: str, track: str) -> bool:
        try:
            self.engine.buy_upgrade(tool_id, track)
        except InsufficientFunds:
            self.notify("Not enough dust for upgrade.", "warn")
            return False
        self._check_achievements()
        self.notify(f"{track.capitalize()} upgrade applied.", "success")
        return True

    def unlock_zone(self) -> bool:
        try:
            zone = self.engine.unlock_zone()
        except InsufficientFunds:
            self.notify("You need more dust to unlock the next zone.", "warn")
            return False
        if zone is None:
            self.notify("Already at the final zone.", "info")
            return False
        logger.info("Unlocked zone %d (%s)", self.state.current_zone_index, zone.name)
        self._check_achievements()
        self.notify(f"Unlocked {zone.name}!", "success")
        return True

    def do_prestige(self) -> PrestigeResult:
        result = self.engine.do_prestige()
        if not result.success:
            self.notify(f"{result.reason}.", "warn")
            return result
        logger.info("Prestiged for %d points", result.reward_amount)
        self._check_achievements()
        self.notify(f"Prestiged! +{result.reward_amount} prestige earned.", "success")
        self.save()
        return result

    def buy_prestige_upgrade(self, upgrade_id: str) -> bool:
        try:
            level = self.engine.buy_prestige_upgrade(upgrade_id)
        except InsufficientFunds:
            self.notify("Not enough prestige.", "warn")
            return False
        self._check_achievements()
        pdef = self.catalog.get_prestige_upgrade(upgrade_id)
        self.notify(f"{pdef.display_name} upgraded to Lv.{level}", "success")
        return True

    def tick(self, delta_seconds: float) -> float:
        """Passive accrual for *delta_seconds*."""
        return self.engine.apply_elapsed_time(delta_seconds)

    def toggle_bgm(self) -> bool:
        self.state.bgm_on = not self.state.bgm_on
        self.notify(f"BGM {'enabled' if self.state.bgm_on else 'muted'}.", "info")
        return self.state.bgm_on

    def toggle_click_sound(self) -> bool:
        self.state.click_sound_on = not self.state.click_sound_on
        self.notify(
            f"Click sound {'enabled' if self.state.click_sound_on else 'muted'}.", "info"
        )
        return self.state.click_sound_on

    def reset(self) -> bool:
        """Start over from a first-run state and delete the stored save.

        Returns False if the save could not be deleted; the in-memory reset
        happens either way.
        """
        self.engine.state = ProgressionState(self.catalog)
        self.engine.state.last_update = self.now_ms()
        self.engine.recalc_production()
        try:
            self.persistence.clear()
        except PersistenceFailure as exc:
            logger.warning("Could not delete save: %s", exc)
            self.notify("Could not delete the old save.", "warn")
            return False
        return True

    # ── Persistence ──────────────────────────────────────────────────

    def save(self) -> bool:
        try:
            self.persistence.save(self.engine, self.now_ms())
        except PersistenceFailure as exc:
            logger.warning("Save failed: %s", exc)
            self.notify("Save failed (storage full or blocked).", "warn")
            return False
        self.notify("Game saved.", "success")
        return True

    def load(self) -> LoadResult | None:
        try:
            result = self.persistence.load(self.engine, self.now_ms())
        except PersistenceFailure as exc:
            logger.warning("Load failed: %s", exc)
            self.notify("Load failed (corrupt or blocked storage).", "warn")
            return None
        if result.found:
            self._update_title()
            if result.offline_gain > 0:
                self.notify(
                    f"Idle gains: +{format_number(result.offline_gain, 0)} dust (multi-zone).",
                    "info",
                )
        return result

    # ── Private helpers ──────────────────────────────────────────────

    def _check_achievements(self) -> list[AchievementDef]:
        unlocked = self.evaluator.check()
        for adef in unlocked:
            self.notify(f"Achievement unlocked: {adef.display_name}", "success")
        self._update_title()
        return unlocked

    def _update_title(self) -> None:
        idx = self.engine.prestige_title_index()
        if idx > self.state.prestige_title_index:
            self.state.prestige_title_index = idx
            self.notify(f"Title earned: {self.catalog.prestige_titles[idx]}", "success")
