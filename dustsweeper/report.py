from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from dustsweeper.metrics import (
    AchievementEvent,
    CurrencySnapshot,
    MetricsCollector,
    PrestigeEvent,
    PurchaseEvent,
    ZoneUnlockEvent,
)


@dataclass
class SimulationReport:
    """Outcome of one simulated playthrough plus the pacing figures derived from it."""

    strategy_description: str = ""
    terminal_description: str = ""
    outcome: str = ""
    total_time: float = 0.0

    currency_snapshots: list[CurrencySnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    achievements: list[AchievementEvent] = field(default_factory=list)
    zone_unlocks: list[ZoneUnlockEvent] = field(default_factory=list)
    prestiges: list[PrestigeEvent] = field(default_factory=list)

    # Pacing
    achievement_times: dict[str, float] = field(default_factory=dict)
    zone_times: dict[int, float] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0
    purchases_by_kind: dict[str, int] = field(default_factory=dict)
    prestige_per_hour: float = 0.0

    # End of run
    final_prestige: int = 0
    final_lifetime_dust: float = 0.0
    final_zone_index: int = 0

    def achievement_time(self, achievement_id: str) -> float | None:
        return self.achievement_times.get(achievement_id)

    def zone_time(self, zone_index: int) -> float | None:
        """First time the zone was unlocked, if it ever was."""
        return self.zone_times.get(zone_index)

    def currency_series(self, zone_index: int) -> list[tuple[float, float]]:
        """(time, balance) pairs for one zone."""
        return self._series(zone_index, "value")

    def rate_series(self, zone_index: int) -> list[tuple[float, float]]:
        """(time, per-second rate) pairs for one zone."""
        return self._series(zone_index, "rate")

    def _series(self, zone_index: int, attr: str) -> list[tuple[float, float]]:
        return [
            (snap.time, getattr(snap, attr))
            for snap in self.currency_snapshots
            if snap.zone_index == zone_index
        ]


def _gaps(times: list[float]) -> list[float]:
    # The first gap is measured from the start of the run.
    starts = [0.0] + times[:-1]
    return [end - start for start, end in zip(starts, times)]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    terminal_description: str,
    outcome: str,
    total_time: float,
    final_prestige: int = 0,
    final_lifetime_dust: float = 0.0,
    final_zone_index: int = 0,
) -> SimulationReport:
    """Derive pacing figures from a finished run's metrics."""
    gaps = _gaps(sorted(p.time for p in collector.purchases))
    minutes = total_time / 60.0
    hours = total_time / 3600.0

    zone_times: dict[int, float] = {}
    for event in collector.zone_unlocks:
        zone_times.setdefault(event.zone_index, event.time)

    earned = sum(p.reward_amount for p in collector.prestiges)

    return SimulationReport(
        strategy_description=strategy_description,
        terminal_description=terminal_description,
        outcome=outcome,
        total_time=total_time,
        currency_snapshots=collector.currency_snapshots,
        purchases=collector.purchases,
        achievements=collector.achievements,
        zone_unlocks=collector.zone_unlocks,
        prestiges=collector.prestiges,
        achievement_times={a.achievement_id: a.time for a in collector.achievements},
        zone_times=zone_times,
        purchase_gaps=gaps,
        max_purchase_gap=max(gaps, default=0.0),
        mean_purchase_gap=sum(gaps) / len(gaps) if gaps else 0.0,
        purchases_per_minute=len(collector.purchases) / minutes if minutes > 0 else 0.0,
        purchases_by_kind=dict(Counter(p.kind for p in collector.purchases)),
        prestige_per_hour=earned / hours if hours > 0 else 0.0,
        final_prestige=final_prestige,
        final_lifetime_dust=final_lifetime_dust,
        final_zone_index=final_zone_index,
    )
