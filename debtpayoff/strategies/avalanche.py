"""Avalanche strategy — extra payments to the highest APR first."""

from __future__ import annotations

from typing import Sequence

from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.strategies.base_strategy import PayoffStrategy


class AvalancheStrategy(PayoffStrategy):
    """Debt avalanche: order by APR, highest first.

    Mathematically optimal single-target strategy for minimizing total interest.
    """

    @property
    def name(self) -> str:
        return "avalanche"

    def order(self, debts: Sequence[DebtAccount]) -> list[DebtAccount]:
        return sorted(debts, key=lambda d: d.apr, reverse=True)
