from __future__ import annotations

import time
from typing import TYPE_CHECKING

from dustsweeper.tool import ToolState

if TYPE_CHECKING:
    from dustsweeper.catalog import Catalog


def now_ms() -> int:
    return int(time.time() * 1000)


class ProgressionState:
    """Mutable runtime container holding all progression state."""

    def __init__(self, catalog: Catalog) -> None:
        # Legacy aggregate total, kept for backward save compatibility
        self.dust: float = 0.0
        self.total_dust_earned: float = 0.0
        self.lifetime_dust: float = 0.0
        self.total_clicks: int = 0
        self.prestige: int = 0
        self.prestige_title_index: int = 0
        self.prestige_upgrades: dict[str, int] = {}
        self.current_zone_index: int = 0
        self.achievement_multiplier: float = 1.0
        self.achievements: dict[str, bool] = {}
        self.bgm_on: bool = False
        self.click_sound_on: bool = True
        self.last_update: int = now_ms()

        self.currencies: dict[int, float] = {i: 0.0 for i in range(len(catalog.zones))}
        self.tools: dict[str, ToolState] = {
            tdef.id: ToolState.fresh(tdef) for tdef in catalog.tools
        }

        # Derived figures, written by the production pipeline
        self.dust_per_click: float = 1.0
        self.passive_per_second: float = 0.0
        self.auto_clicks_per_second: float = 0.0
        self.total_per_second: float = 0.0
        self.currency_per_second: dict[int, float] = {}
        self.currency_clicks: dict[int, float] = {}

    def currency(self, zone_index: int) -> float:
        return self.currencies.get(zone_index, 0.0)

    def tool_level(self, id: str) -> int:
        ts = self.tools.get(id)
        return ts.level if ts else 0

    def total_tool_levels(self) -> int:
        return sum(ts.level for ts in self.tools.values())

    def prestige_upgrade_level(self, id: str) -> int:
        return self.prestige_upgrades.get(id, 0)

    def has_achievement(self, id: str) -> bool:
        return self.achievements.get(id, False)

    def unlocked_achievements(self) -> set[str]:
        return {aid for aid, unlocked in self.achievements.items() if unlocked}
