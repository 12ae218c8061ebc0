"""Snowball strategy — extra payments to the smallest balance first."""

from __future__ import annotations

from typing import Sequence

from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.strategies.base_strategy import PayoffStrategy


class SnowballStrategy(PayoffStrategy):
    """Debt snowball: order by current balance, smallest first.

    Psychologically motivated strategy — quick wins by eliminating small debts.
    """

    @property
    def name(self) -> str:
        return "snowball"

    def order(self, debts: Sequence[DebtAccount]) -> list[DebtAccount]:
        return sorted(debts, key=lambda d: d.principal_balance)
