from __future__ import annotations


class DustSweeperError(Exception):
    """Base class for recoverable game errors."""


class InsufficientFunds(DustSweeperError):
    """A guarded debit found the balance below the cost. Nothing was changed."""

    def __init__(self, what: str, cost: float, balance: float, zone: int | None = None) -> None:
        self.what = what
        self.cost = cost
        self.balance = balance
        self.zone = zone
        where = "prestige points" if zone is None else f"zone {zone} currency"
        super().__init__(
            f"Cannot afford {what}: costs {cost:g} {where}, have {balance:g}"
        )


class PersistenceFailure(DustSweeperError):
    """Reading or writing the save blob failed."""
