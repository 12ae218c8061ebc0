"""Minimum-payments-only reference run used for savings figures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from debtpayoff.engine.financial_model import DebtAccount, DebtState
from debtpayoff.engine.month_step import MonthStepProcessor

MAX_MONTHS = 600  # 50 years


@dataclass(frozen=True)
class BaselineResult:
    months: int
    total_interest: int  # Cents charged over the run
    converged: bool = True


def calculate_baseline(debts: Sequence[DebtAccount], max_months: int = MAX_MONTHS) -> BaselineResult:
    """Simulate paying only minimums until every debt is gone or the cap hits.

    Uses the same month step as the strategy run with no extra budget, no
    lump sum, no rounding and no redistribution of freed minimums, so debt
    order is irrelevant. Callers are expected to pass validated debts.
    """
    processor = MonthStepProcessor(debts)
    states = {d.id: DebtState.from_account(d) for d in debts}

    month = 0
    total_interest = 0
    while month < max_months and not all(s.paid_off for s in states.values()):
        month += 1
        outcome = processor.step(states, extra_budget=0)
        total_interest += sum(s.interest_charge for s in outcome.snapshots)
        states = outcome.states

    converged = all(s.paid_off for s in states.values())
    return BaselineResult(months=month, total_interest=total_interest, converged=converged)
