from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from dustsweeper._types import compare

if TYPE_CHECKING:
    from dustsweeper.state import ProgressionState


class Requirement(ABC):
    """Base class for all requirements: pure boolean conditions on progression state."""

    @abstractmethod
    def evaluate(self, state: ProgressionState) -> bool: ...

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _StatRequirement(Requirement):
    """Compares one numeric attribute of the state against a threshold."""

    def __init__(self, attr: str, op: str, threshold: float) -> None:
        self.attr = attr
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: ProgressionState) -> bool:
        return compare(getattr(state, self.attr) or 0, self.op, self.threshold)


class _ToolLevelsRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: ProgressionState) -> bool:
        return compare(state.total_tool_levels(), self.op, self.threshold)


class _OwnsAnyToolRequirement(Requirement):
    def evaluate(self, state: ProgressionState) -> bool:
        return any(ts.level > 0 for ts in state.tools.values())


class _ToolLevelRequirement(Requirement):
    def __init__(self, tool_id: str, op: str, threshold: int) -> None:
        self.tool_id = tool_id
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: ProgressionState) -> bool:
        return compare(state.tool_level(self.tool_id), self.op, self.threshold)


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: ProgressionState) -> bool:
        return all(r.evaluate(state) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: ProgressionState) -> bool:
        return any(r.evaluate(state) for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[ProgressionState], bool]) -> None:
        self.fn = fn

    def evaluate(self, state: ProgressionState) -> bool:
        return self.fn(state)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def total_earned(op: str, threshold: float) -> Requirement:
        """Currency earned this run (reset by prestige)."""
        return _StatRequirement("total_dust_earned", op, threshold)

    @staticmethod
    def lifetime(op: str, threshold: float) -> Requirement:
        return _StatRequirement("lifetime_dust", op, threshold)

    @staticmethod
    def clicks(op: str, threshold: float) -> Requirement:
        return _StatRequirement("total_clicks", op, threshold)

    @staticmethod
    def prestige(op: str, threshold: float) -> Requirement:
        """Prestige point balance."""
        return _StatRequirement("prestige", op, threshold)

    @staticmethod
    def per_second(op: str, threshold: float) -> Requirement:
        return _StatRequirement("total_per_second", op, threshold)

    @staticmethod
    def auto_clicks(op: str, threshold: float) -> Requirement:
        return _StatRequirement("auto_clicks_per_second", op, threshold)

    @staticmethod
    def zone(op: str, index: int) -> Requirement:
        return _StatRequirement("current_zone_index", op, index)

    @staticmethod
    def tool_levels(op: str, threshold: int) -> Requirement:
        """Sum of levels across all tools."""
        return _ToolLevelsRequirement(op, threshold)

    @staticmethod
    def tool_level(tool_id: str, op: str, threshold: int) -> Requirement:
        return _ToolLevelRequirement(tool_id, op, threshold)

    @staticmethod
    def owns_any_tool() -> Requirement:
        return _OwnsAnyToolRequirement()

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[ProgressionState], bool]) -> Requirement:
        return _CustomRequirement(fn)
