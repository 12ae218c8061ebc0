"""Abstract base class for payoff ordering strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from debtpayoff.engine.financial_model import DebtAccount


class PayoffStrategy(ABC):
    """Interface for deciding which debt receives extra payments first.

    The scheduler orders debts once, before month 1. Each month the first
    debt in that order that is not yet paid off is the target for the
    extra-payment pool; every other debt gets only its minimum.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Method name as used in PayoffOptions.method."""
        ...

    @abstractmethod
    def order(self, debts: Sequence[DebtAccount]) -> list[DebtAccount]:
        """Return the debts in payoff priority order.

        Implementations must not drop debts and must keep input order
        for ties (Python's sort is stable).

        Args:
            debts: Validated debts in caller order.

        Returns:
            A new list, highest priority first.
        """
        ...
