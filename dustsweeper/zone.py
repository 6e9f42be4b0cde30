from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ZoneDef:
    """A sequential stage with its own currency and a flat production bonus."""

    name: str
    cost: float = 0.0
    bonus: float = 0.0
    currency: str = "Dust"
