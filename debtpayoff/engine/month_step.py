"""MonthStepProcessor — advance every debt by one simulated month.

Pipeline per debt, in priority order:
    1. Accrue interest on the starting balance (before any payment)
    2. Start from the minimum payment; the current target also gets extra
    3. Optionally round the payment up, never past what is owed
    4. Split into interest and principal, capitalising unpaid interest
    5. Mark the debt paid off when the balance reaches zero

The input arena is never modified; each call returns a new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from debtpayoff.engine.financial_model import (
    DebtAccount,
    DebtState,
    compute_interest,
    round_up_payment,
    split_payment,
)


@dataclass(frozen=True)
class DebtSnapshot:
    """One debt's activity in one month (all cents)."""

    debt_id: str
    debt_name: str
    starting_balance: int
    interest_charge: int
    payment: int
    interest_portion: int
    principal_portion: int
    ending_balance: int
    paid_off: bool


@dataclass(frozen=True)
class MonthOutcome:
    """Result of one month: the new arena plus per-debt snapshots."""

    states: dict[str, DebtState]
    snapshots: list[DebtSnapshot]
    extra_applied: int
    extra_unspent: int


class MonthStepProcessor:
    """Apply one month of interest and payments to a set of debts.

    Args:
        debts: Debts in payoff priority order (see strategies).
        round_up_to_nearest: Optional rounding unit in cents.
    """

    def __init__(
        self,
        debts: Sequence[DebtAccount],
        round_up_to_nearest: int | None = None,
    ):
        self.debts = list(debts)
        self.round_up_to_nearest = round_up_to_nearest

    def target_id(self, states: Mapping[str, DebtState]) -> str | None:
        """Earliest debt in priority order that is not yet paid off."""
        for debt in self.debts:
            if not states[debt.id].paid_off:
                return debt.id
        return None

    def step(self, states: Mapping[str, DebtState], extra_budget: int = 0) -> MonthOutcome:
        """Advance all debts by one month.

        Args:
            states: Current arena (debt id → DebtState). Not modified.
            extra_budget: Cents available beyond minimums this month.

        Returns:
            MonthOutcome with the next arena and one snapshot per debt.
        """
        target = self.target_id(states)
        budget = max(0, extra_budget)
        extra_applied = 0

        next_states: dict[str, DebtState] = {}
        snapshots: list[DebtSnapshot] = []

        for debt in self.debts:
            state = states[debt.id]
            if state.paid_off:
                next_states[debt.id] = state
                snapshots.append(
                    DebtSnapshot(
                        debt_id=debt.id,
                        debt_name=debt.name,
                        starting_balance=0,
                        interest_charge=0,
                        payment=0,
                        interest_portion=0,
                        principal_portion=0,
                        ending_balance=0,
                        paid_off=True,
                    )
                )
                continue

            starting_balance = state.current_balance
            interest_charge = compute_interest(starting_balance, debt.apr)
            owed = starting_balance + interest_charge

            payment = debt.min_payment
            if debt.id == target and budget > 0:
                extra = min(budget, max(0, owed - debt.min_payment))
                payment += extra
                budget -= extra
                extra_applied += extra

            payment = round_up_payment(payment, self.round_up_to_nearest)
            # Never pay past what is owed this month
            payment = min(payment, owed)

            interest_portion, principal_portion, ending_balance = split_payment(
                starting_balance, interest_charge, payment
            )
            paid_off = ending_balance <= 0

            next_states[debt.id] = DebtState(
                debt_id=debt.id,
                current_balance=ending_balance,
                paid_off=paid_off,
            )
            snapshots.append(
                DebtSnapshot(
                    debt_id=debt.id,
                    debt_name=debt.name,
                    starting_balance=starting_balance,
                    interest_charge=interest_charge,
                    payment=payment,
                    interest_portion=interest_portion,
                    principal_portion=principal_portion,
                    ending_balance=ending_balance,
                    paid_off=paid_off,
                )
            )

        return MonthOutcome(
            states=next_states,
            snapshots=snapshots,
            extra_applied=extra_applied,
            extra_unspent=budget,
        )


@dataclass(frozen=True)
class PayoffStep:
    """One month of the payoff timeline with aggregates across debts."""

    month: int                  # 1-based
    month_name: str             # e.g. "March 2025"
    debts: list[DebtSnapshot]
    total_payment: int
    total_interest: int         # Interest charged this month
    total_principal: int
    remaining_debt: int
    extra_applied: int = 0

    @classmethod
    def from_outcome(cls, month: int, month_name: str, outcome: MonthOutcome) -> PayoffStep:
        snapshots = outcome.snapshots
        return cls(
            month=month,
            month_name=month_name,
            debts=snapshots,
            total_payment=sum(s.payment for s in snapshots),
            total_interest=sum(s.interest_charge for s in snapshots),
            total_principal=sum(s.principal_portion for s in snapshots),
            remaining_debt=sum(s.current_balance for s in outcome.states.values()),
            extra_applied=outcome.extra_applied,
        )

    def snapshot_for(self, debt_id: str) -> DebtSnapshot | None:
        for snapshot in self.debts:
            if snapshot.debt_id == debt_id:
                return snapshot
        return None
