"""Ordering strategies for debt payoff."""

from __future__ import annotations

from typing import Iterable, Sequence

from debtpayoff.engine.errors import InvalidOptions
from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.strategies.avalanche import AvalancheStrategy
from debtpayoff.strategies.base_strategy import PayoffStrategy
from debtpayoff.strategies.custom import CustomStrategy
from debtpayoff.strategies.snowball import SnowballStrategy

ALL_STRATEGIES = [
    AvalancheStrategy,
    SnowballStrategy,
    CustomStrategy,
]


def get_strategy(method: str, custom_order: Iterable[str] | None = None) -> PayoffStrategy:
    """Build the strategy for a PayoffOptions.method value."""
    if method == "avalanche":
        return AvalancheStrategy()
    if method == "snowball":
        return SnowballStrategy()
    if method == "custom":
        return CustomStrategy(custom_order)
    raise InvalidOptions(f"Unknown payoff method {method!r}")


def order_debts(
    debts: Sequence[DebtAccount],
    method: str,
    custom_order: Iterable[str] | None = None,
) -> list[DebtAccount]:
    """Order debts by payoff priority for the given method."""
    return get_strategy(method, custom_order).order(debts)


__all__ = [
    "PayoffStrategy",
    "AvalancheStrategy",
    "SnowballStrategy",
    "CustomStrategy",
    "ALL_STRATEGIES",
    "get_strategy",
    "order_debts",
]
