from __future__ import annotations

from dataclasses import dataclass

from dustsweeper.formatting import format_number
from dustsweeper.requirement import Requirement


@dataclass(frozen=True)
class DustReward:
    """Flat currency grant, routed through the active multipliers."""

    value: float


@dataclass(frozen=True)
class PrestigeReward:
    """Flat prestige point grant, not subject to multipliers."""

    value: int


@dataclass(frozen=True)
class MultiplierReward:
    """Permanent bump: achievement multiplier *= (1 + value)."""

    value: float


Reward = DustReward | PrestigeReward | MultiplierReward


@dataclass
class AchievementDef:
    """A one-time reward that fires when its trigger is met."""

    id: str
    display_name: str = ""
    description: str = ""
    trigger: Requirement | None = None
    reward: Reward | None = None

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


def describe_reward(reward: Reward | None) -> str:
    if reward is None:
        return ""
    if isinstance(reward, DustReward):
        return f"+{format_number(reward.value, 0)} dust"
    if isinstance(reward, PrestigeReward):
        return f"+{reward.value} prestige"
    if isinstance(reward, MultiplierReward):
        return f"+{round(reward.value * 100)}% boost"
    raise TypeError(f"Unknown reward type: {type(reward).__name__}")
