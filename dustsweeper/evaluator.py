from __future__ import annotations

from typing import TYPE_CHECKING

from dustsweeper.achievement import (
    AchievementDef,
    DustReward,
    MultiplierReward,
    PrestigeReward,
)

if TYPE_CHECKING:
    from dustsweeper.engine import EconomyEngine


class AchievementEvaluator:
    """Unlocks achievements whose triggers hold and applies each reward once."""

    def __init__(self, engine: EconomyEngine) -> None:
        self.engine = engine

    def check(self) -> list[AchievementDef]:
        """Scan every definition once. Returns the achievements unlocked by this call."""
        state = self.engine.state
        unlocked: list[AchievementDef] = []
        for adef in self.engine.catalog.achievements:
            if state.has_achievement(adef.id):
                continue
            if adef.trigger is not None and adef.trigger.evaluate(state):
                self._apply_reward(adef)
                state.achievements[adef.id] = True
                unlocked.append(adef)
        return unlocked

    def _apply_reward(self, adef: AchievementDef) -> None:
        reward = adef.reward
        if reward is None:
            return
        state = self.engine.state
        if isinstance(reward, DustReward):
            self.engine.add_dust(reward.value)
        elif isinstance(reward, PrestigeReward):
            state.prestige += reward.value
        elif isinstance(reward, MultiplierReward):
            state.achievement_multiplier = (state.achievement_multiplier or 1.0) * (1 + reward.value)
        else:
            raise TypeError(f"Unknown reward type: {type(reward).__name__}")
        self.engine.recalc_production()
