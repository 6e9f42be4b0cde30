from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dustsweeper._types import compare

if TYPE_CHECKING:
    from dustsweeper.state import ProgressionState


@dataclass
class SimulationContext:
    """Simulation bookkeeping that lives outside the progression state."""

    time_elapsed: float = 0.0
    last_purchase_time: float = 0.0
    total_purchases: int = 0
    prestige_count: int = 0


class TerminalCondition(ABC):
    """Base class for simulation stopping conditions."""

    @abstractmethod
    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool: ...

    @abstractmethod
    def describe(self) -> str: ...


class _TimeTerminal(TerminalCondition):
    def __init__(self, seconds: float) -> None:
        self.seconds = seconds

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return context.time_elapsed >= self.seconds

    def describe(self) -> str:
        return f"time({self.seconds})"


class _ZoneTerminal(TerminalCondition):
    def __init__(self, zone_index: int) -> None:
        self.zone_index = zone_index

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return state.current_zone_index >= self.zone_index

    def describe(self) -> str:
        return f"zone({self.zone_index})"


class _PrestigeTerminal(TerminalCondition):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return compare(state.prestige, self.op, self.threshold)

    def describe(self) -> str:
        return f'prestige("{self.op}", {self.threshold})'


class _AchievementTerminal(TerminalCondition):
    def __init__(self, achievement_id: str) -> None:
        self.achievement_id = achievement_id

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return state.has_achievement(self.achievement_id)

    def describe(self) -> str:
        return f'achievement("{self.achievement_id}")'


class _StallTerminal(TerminalCondition):
    def __init__(self, max_idle_seconds: float) -> None:
        self.max_idle_seconds = max_idle_seconds

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return context.time_elapsed - context.last_purchase_time >= self.max_idle_seconds

    def describe(self) -> str:
        return f"stall({self.max_idle_seconds})"


class _AnyTerminal(TerminalCondition):
    def __init__(self, conditions: list[TerminalCondition]) -> None:
        self.conditions = conditions

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return any(c.is_met(state, context) for c in self.conditions)

    def describe(self) -> str:
        return " OR ".join(c.describe() for c in self.conditions)


class _AllTerminal(TerminalCondition):
    def __init__(self, conditions: list[TerminalCondition]) -> None:
        self.conditions = conditions

    def is_met(self, state: ProgressionState, context: SimulationContext) -> bool:
        return all(c.is_met(state, context) for c in self.conditions)

    def describe(self) -> str:
        return " AND ".join(c.describe() for c in self.conditions)


class Terminal:
    """Factory for built-in terminal conditions."""

    @staticmethod
    def time(seconds: float) -> TerminalCondition:
        return _TimeTerminal(seconds)

    @staticmethod
    def zone(zone_index: int) -> TerminalCondition:
        return _ZoneTerminal(zone_index)

    @staticmethod
    def prestige(op: str, threshold: float) -> TerminalCondition:
        return _PrestigeTerminal(op, threshold)

    @staticmethod
    def achievement(achievement_id: str) -> TerminalCondition:
        return _AchievementTerminal(achievement_id)

    @staticmethod
    def stall(max_idle_seconds: float = 600) -> TerminalCondition:
        return _StallTerminal(max_idle_seconds)

    @staticmethod
    def any(*conditions: TerminalCondition) -> TerminalCondition:
        return _AnyTerminal(list(conditions))

    @staticmethod
    def all(*conditions: TerminalCondition) -> TerminalCondition:
        return _AllTerminal(list(conditions))
