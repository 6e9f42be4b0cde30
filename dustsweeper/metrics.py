from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dustsweeper.state import ProgressionState


@dataclass
class CurrencySnapshot:
    time: float
    zone_index: int
    value: float
    rate: float


@dataclass
class PurchaseEvent:
    time: float
    kind: str
    item_id: str
    cost_paid: float
    currency_zone: int
    track: str | None = None


@dataclass
class AchievementEvent:
    time: float
    achievement_id: str


@dataclass
class ZoneUnlockEvent:
    time: float
    zone_index: int


@dataclass
class PrestigeEvent:
    time: float
    reward_amount: int
    run_duration: float


class MetricsCollector:
    """Collects simulation metrics at configurable intervals."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float = float("-inf")

        self.currency_snapshots: list[CurrencySnapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.achievements: list[AchievementEvent] = []
        self.zone_unlocks: list[ZoneUnlockEvent] = []
        self.prestiges: list[PrestigeEvent] = []

    def record_tick(self, state: ProgressionState, time: float) -> None:
        """Record a snapshot if enough time has passed."""
        if time - self._last_snapshot_time >= self.snapshot_interval:
            self._take_snapshot(state, time)
            self._last_snapshot_time = time

    def record_purchase(
        self,
        time: float,
        kind: str,
        item_id: str,
        cost_paid: float,
        currency_zone: int,
        track: str | None = None,
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=time,
                kind=kind,
                item_id=item_id,
                cost_paid=cost_paid,
                currency_zone=currency_zone,
                track=track,
            )
        )

    def record_achievement(self, time: float, achievement_id: str) -> None:
        self.achievements.append(AchievementEvent(time=time, achievement_id=achievement_id))

    def record_zone_unlock(self, time: float, zone_index: int) -> None:
        self.zone_unlocks.append(ZoneUnlockEvent(time=time, zone_index=zone_index))

    def record_prestige(self, time: float, reward_amount: int, run_duration: float) -> None:
        self.prestiges.append(
            PrestigeEvent(time=time, reward_amount=reward_amount, run_duration=run_duration)
        )

    def _take_snapshot(self, state: ProgressionState, time: float) -> None:
        for idx, value in sorted(state.currencies.items()):
            self.currency_snapshots.append(
                CurrencySnapshot(
                    time=time,
                    zone_index=idx,
                    value=value,
                    rate=state.currency_per_second.get(idx, 0.0),
                )
            )
