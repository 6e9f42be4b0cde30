from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from dustsweeper.requirement import Requirement
from dustsweeper.tool import PurchaseOption

if TYPE_CHECKING:
    from dustsweeper.state import ProgressionState


@dataclass
class ClickProfile:
    """Configures manual clicking for strategies."""

    clicks_per_second: float = 0.0
    active_until: Requirement | None = None

    def get_clicks(self, state: ProgressionState, duration: float) -> int:
        """Number of clicks for the given duration."""
        if self.active_until is not None and self.active_until.evaluate(state):
            return 0
        return max(0, int(self.clicks_per_second * duration))


class Strategy(ABC):
    """Base class for simulation strategies."""

    @abstractmethod
    def decide_purchases(
        self, state: ProgressionState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        """Return ordered list of purchases to attempt."""
        ...

    def get_clicks(self, state: ProgressionState, duration: float) -> int:
        """Return clicks during this tick."""
        return 0

    def should_prestige(self, state: ProgressionState, available: int) -> bool:
        """Whether to prestige now, given the points a reset would grant."""
        return False

    @abstractmethod
    def describe(self) -> str: ...


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable option first."""

    def __init__(
        self,
        click_profile: ClickProfile | None = None,
        prestige_at: int | None = None,
        include_upgrades: bool = True,
        unlock_zones: bool = True,
    ) -> None:
        self.click_profile = click_profile
        self.prestige_at = prestige_at
        self.include_upgrades = include_upgrades
        self.unlock_zones = unlock_zones

    def decide_purchases(
        self, state: ProgressionState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        options = [
            o
            for o in affordable
            if (o.kind != "upgrade" or self.include_upgrades)
            and (o.kind != "zone" or self.unlock_zones)
        ]
        return sorted(options, key=lambda o: o.cost)

    def get_clicks(self, state: ProgressionState, duration: float) -> int:
        if self.click_profile:
            return self.click_profile.get_clicks(state, duration)
        return 0

    def should_prestige(self, state: ProgressionState, available: int) -> bool:
        return self.prestige_at is not None and available >= self.prestige_at

    def describe(self) -> str:
        parts = ["GreedyCheapest"]
        if self.click_profile and self.click_profile.clicks_per_second:
            parts.append(f"({self.click_profile.clicks_per_second} CPS)")
        if self.prestige_at is not None:
            parts.append(f"prestige@{self.prestige_at}")
        return " ".join(parts)


class ToolsOnly(GreedyCheapest):
    """Greedy on tool levels and zones, never buys sub-upgrades."""

    def __init__(
        self,
        click_profile: ClickProfile | None = None,
        prestige_at: int | None = None,
    ) -> None:
        super().__init__(click_profile, prestige_at, include_upgrades=False)

    def describe(self) -> str:
        return super().describe().replace("GreedyCheapest", "ToolsOnly", 1)


class CustomStrategy(Strategy):
    """Strategy defined by callables."""

    def __init__(
        self,
        decide_fn: Callable[
            [ProgressionState, list[PurchaseOption]], list[PurchaseOption]
        ] | None = None,
        clicks_fn: Callable[[ProgressionState, float], int] | None = None,
        prestige_fn: Callable[[ProgressionState, int], bool] | None = None,
        name: str = "Custom",
    ) -> None:
        self._decide_fn = decide_fn
        self._clicks_fn = clicks_fn
        self._prestige_fn = prestige_fn
        self._name = name

    def decide_purchases(
        self, state: ProgressionState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        if self._decide_fn:
            return self._decide_fn(state, affordable)
        return []

    def get_clicks(self, state: ProgressionState, duration: float) -> int:
        if self._clicks_fn:
            return self._clicks_fn(state, duration)
        return 0

    def should_prestige(self, state: ProgressionState, available: int) -> bool:
        if self._prestige_fn:
            return self._prestige_fn(state, available)
        return False

    def describe(self) -> str:
        return self._name


STRATEGY_REGISTRY: dict[str, type[GreedyCheapest]] = {
    "greedy_cheapest": GreedyCheapest,
    "tools_only": ToolsOnly,
}
