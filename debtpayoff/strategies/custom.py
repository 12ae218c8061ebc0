"""Custom strategy — the caller names the payoff order."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from debtpayoff.engine.errors import InvalidOptions
from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.strategies.base_strategy import PayoffStrategy

logger = logging.getLogger(__name__)


class CustomStrategy(PayoffStrategy):
    """Follow a user-defined sequence of debt ids.

    Debts missing from the sequence are appended in their input order.
    Unknown ids are ignored; duplicates keep their first position.
    """

    def __init__(self, custom_order: Iterable[str] | None = None):
        self.custom_order = list(custom_order or [])

    @property
    def name(self) -> str:
        return "custom"

    def order(self, debts: Sequence[DebtAccount]) -> list[DebtAccount]:
        if not self.custom_order:
            raise InvalidOptions("Custom payoff order is empty")

        by_id = {d.id: d for d in debts}
        unknown = [debt_id for debt_id in self.custom_order if debt_id not in by_id]
        if len(unknown) == len(self.custom_order):
            raise InvalidOptions(
                f"Custom payoff order references no known debts: {', '.join(map(str, unknown))}"
            )
        if unknown:
            logger.warning("Ignoring unknown debt ids in custom order: %s", unknown)

        ordered: list[DebtAccount] = []
        placed: set[str] = set()
        for debt_id in self.custom_order:
            if debt_id in by_id and debt_id not in placed:
                ordered.append(by_id[debt_id])
                placed.add(debt_id)

        # Anything the caller left out keeps its input order at the end
        ordered.extend(d for d in debts if d.id not in placed)
        return ordered
