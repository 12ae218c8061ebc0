"""Portfolio-level debt KPIs for dashboards.

Projections assume minimum payments only, the same reference run used for
savings figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from debtpayoff.engine.baseline import calculate_baseline
from debtpayoff.engine.financial_model import (
    DebtAccount,
    calculate_credit_utilization,
    compute_weighted_avg_apr,
    validate_debts,
)
from debtpayoff.engine.scheduler import add_months


@dataclass(frozen=True)
class DebtKPIs:
    total_debt: int                     # Cents
    monthly_minimum: int                # Cents
    average_apr: float                  # Balance-weighted, percent
    total_credit_utilization: float     # Percent, credit cards only
    months_to_debt_free: int
    projected_debt_free_date: date | None
    total_interest_projected: int       # Cents


def compute_debt_kpis(debts: Iterable[DebtAccount], start_date: date | None = None) -> DebtKPIs:
    """Summarize a debt portfolio.

    `projected_debt_free_date` is None when minimum payments never clear
    the debt within the simulation cap.
    """
    debts = validate_debts(debts)
    start_date = start_date or date.today()
    active = [d for d in debts if d.principal_balance > 0]

    baseline = calculate_baseline(debts)
    debt_free = add_months(start_date, baseline.months) if baseline.converged else None

    return DebtKPIs(
        total_debt=sum(d.principal_balance for d in debts),
        monthly_minimum=sum(d.min_payment for d in active),
        average_apr=compute_weighted_avg_apr(debts),
        total_credit_utilization=calculate_credit_utilization(debts),
        months_to_debt_free=baseline.months,
        projected_debt_free_date=debt_free,
        total_interest_projected=baseline.total_interest,
    )
