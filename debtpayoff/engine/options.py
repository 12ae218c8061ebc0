"""Repayment policy options for a payoff simulation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from debtpayoff.engine.errors import InvalidOptions

METHODS = ("avalanche", "snowball", "custom")


@dataclass(frozen=True)
class LumpSum:
    """One-time extra payment applied in the month matching `date`."""

    amount: int  # Cents
    date: date

    def applies_to(self, month_date: date) -> bool:
        """True if `month_date` falls in the same year and month."""
        return (self.date.year, self.date.month) == (month_date.year, month_date.month)


@dataclass(frozen=True)
class PayoffOptions:
    """How extra money is routed across debts each month.

    `keep_minimums` controls the snowball effect: when True, the minimum
    payment of every debt already paid off joins the extra-payment pool.
    """

    method: str = "avalanche"
    extra_per_month: int = 0            # Cents
    lump_sum: LumpSum | None = None
    round_up_to_nearest: int | None = None  # Cents
    keep_minimums: bool = True
    custom_order: tuple[str, ...] | None = None

    def validate(self) -> None:
        """Raise InvalidOptions for malformed options.

        Whether a custom order is usable depends on the debts and is checked
        by the custom strategy itself.
        """
        if self.method not in METHODS:
            raise InvalidOptions(
                f"Unknown payoff method {self.method!r}. Valid: {', '.join(METHODS)}"
            )
        if self.extra_per_month < 0:
            raise InvalidOptions("extra_per_month must not be negative")
        if self.round_up_to_nearest is not None and self.round_up_to_nearest <= 0:
            raise InvalidOptions("round_up_to_nearest must be a positive amount")
        if self.lump_sum is not None and self.lump_sum.amount < 0:
            raise InvalidOptions("Lump sum amount must not be negative")
        if self.method == "custom" and not self.custom_order:
            raise InvalidOptions("A custom payoff order is required for method 'custom'")
