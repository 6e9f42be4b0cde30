from __future__ import annotations

import math
from typing import Callable


class CostScaling:
    """Steps a purchase cost forward after each purchase.

    Costs are always advanced from the stored current cost, never rebuilt
    from the base cost, so rounding compounds exactly the way saved games
    expect.
    """

    def __init__(self, fn: Callable[[float], float]) -> None:
        self._fn = fn

    def step(self, cost: float) -> float:
        """Cost of the next purchase given the cost just paid."""
        return self._fn(cost)

    def compute(self, base_cost: float, count: int) -> float:
        """Cost after *count* purchases starting from *base_cost*."""
        cost = base_cost
        for _ in range(count):
            cost = self._fn(cost)
        return cost

    @classmethod
    def fixed(cls) -> CostScaling:
        """Cost never changes."""
        return cls(lambda cost: cost)

    @classmethod
    def exponential(cls, growth_rate: float = 1.18) -> CostScaling:
        """Cost = ceil(cost * growth_rate), compounding per purchase."""
        gr = growth_rate  # capture

        def _step(cost: float) -> float:
            return float(math.ceil(cost * gr))

        return cls(_step)

    @classmethod
    def custom(cls, fn: Callable[[float], float]) -> CostScaling:
        """Arbitrary step function."""
        return cls(fn)


def track_cost(base_cost: float, level: int, factor: float = 0.6) -> float:
    """Cost of the next level of a tool's sub-upgrade track."""
    return float(math.ceil(base_cost * factor * (level + 1)))


def linear_cost(base_cost: float, level: int) -> float:
    """Cost = base * (1 + level); used by the prestige shop."""
    return base_cost * (1 + level)
