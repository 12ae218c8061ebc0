"""PayoffScheduler — drive the month loop and assemble a PayoffSimulation.

Each run owns its own DebtState arena. Debts are ordered once, before month 1,
and the loop stops when every debt is paid off or after MAX_MONTHS months.
Hitting the cap with debt remaining is reported through
`PayoffResults.converged`, not raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from debtpayoff.engine.baseline import MAX_MONTHS, BaselineResult, calculate_baseline
from debtpayoff.engine.errors import InvalidOptions
from debtpayoff.engine.financial_model import DebtAccount, DebtState, validate_debts
from debtpayoff.engine.milestones import PayoffMilestone, detect_milestones
from debtpayoff.engine.month_step import MonthStepProcessor, PayoffStep
from debtpayoff.engine.options import PayoffOptions
from debtpayoff.strategies import get_strategy

logger = logging.getLogger(__name__)


def add_months(start: date, months: int) -> date:
    """First day of the month `months` after `start`'s month."""
    index = start.year * 12 + (start.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


# English names regardless of LC_TIME
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def month_label(value: date) -> str:
    """Label such as 'March 2025', always in English."""
    return f"{MONTH_NAMES[value.month - 1]} {value.year}"


@dataclass(frozen=True)
class PayoffResults:
    months_to_debt_free: int
    total_interest_paid: int
    interest_saved: int
    months_saved: int
    timeline: list[PayoffStep] = field(default_factory=list)
    milestones: list[PayoffMilestone] = field(default_factory=list)
    converged: bool = True
    baseline_months: int = 0
    baseline_interest: int = 0
    total_paid: int = 0
    debt_free_date: date | None = None


@dataclass(frozen=True)
class PayoffSimulation:
    """Final artifact: the options that produced it plus the results."""

    options: PayoffOptions
    results: PayoffResults

    @property
    def method(self) -> str:
        return self.options.method


class PayoffScheduler:
    """Run a full payoff simulation for one set of options.

    Args:
        max_months: Hard iteration cap.
    """

    def __init__(self, max_months: int = MAX_MONTHS):
        self.max_months = max_months

    def run(
        self,
        debts: Iterable[DebtAccount],
        options: PayoffOptions,
        start_date: date | None = None,
        baseline: BaselineResult | None = None,
    ) -> PayoffSimulation:
        """Simulate month by month until debt free or the cap is reached.

        Args:
            debts: Debt records (read-only snapshot).
            options: Repayment policy.
            start_date: Month 1 is the month after this date. Defaults to today.
            baseline: Precomputed minimum-only run; computed if omitted.

        Raises:
            InvalidOptions: Empty debt list or unusable options.
            InvalidDebt: A malformed debt record.
        """
        debts = validate_debts(debts)
        if not debts:
            raise InvalidOptions("At least one debt is required")
        options.validate()

        ordered = get_strategy(options.method, options.custom_order).order(debts)
        min_payments = {d.id: d.min_payment for d in debts}
        start_date = start_date or date.today()
        if baseline is None:
            baseline = calculate_baseline(debts, self.max_months)

        logger.debug(
            "Simulating %d debts with %s, extra=%d, order=%s",
            len(debts), options.method, options.extra_per_month, [d.id for d in ordered],
        )

        processor = MonthStepProcessor(ordered, options.round_up_to_nearest)
        states = {d.id: DebtState.from_account(d) for d in ordered}

        timeline: list[PayoffStep] = []
        milestones: list[PayoffMilestone] = []
        freed_minimums = 0
        total_interest = 0
        total_paid = 0
        month = 0
        previous: PayoffStep | None = None

        while month < self.max_months and not all(s.paid_off for s in states.values()):
            month += 1
            month_date = add_months(start_date, month)

            budget = options.extra_per_month
            if options.keep_minimums:
                budget += freed_minimums
            if options.lump_sum is not None and options.lump_sum.applies_to(month_date):
                budget += options.lump_sum.amount

            outcome = processor.step(states, budget)
            step = PayoffStep.from_outcome(month, month_label(month_date), outcome)

            new_milestones = detect_milestones(previous, step)
            for milestone in new_milestones:
                freed_minimums += min_payments[milestone.debt_id]
            milestones.extend(new_milestones)

            timeline.append(step)
            total_interest += step.total_interest
            total_paid += step.total_payment
            states = outcome.states
            previous = step

        converged = all(s.paid_off for s in states.values())
        if not converged:
            logger.warning(
                "Debt not paid off after %d months; %d cents remain. "
                "Interest exceeds the payments on at least one debt.",
                month, sum(s.current_balance for s in states.values()),
            )

        results = PayoffResults(
            months_to_debt_free=month,
            total_interest_paid=total_interest,
            interest_saved=max(0, baseline.total_interest - total_interest),
            months_saved=max(0, baseline.months - month),
            timeline=timeline,
            milestones=milestones,
            converged=converged,
            baseline_months=baseline.months,
            baseline_interest=baseline.total_interest,
            total_paid=total_paid,
            debt_free_date=add_months(start_date, month) if converged else None,
        )
        return PayoffSimulation(options=options, results=results)


def compute_payoff_schedule(
    debts: Iterable[DebtAccount],
    options: PayoffOptions,
    start_date: date | None = None,
) -> PayoffSimulation:
    """Compute a complete payoff schedule with savings against minimums only."""
    return PayoffScheduler().run(debts, options, start_date)
