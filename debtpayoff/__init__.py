"""Debt payoff simulation and strategy engine."""

from debtpayoff.engine.errors import InvalidDebt, InvalidOptions, ValidationError
from debtpayoff.engine.financial_model import (
    DebtAccount,
    PaymentAllocation,
    calculate_credit_utilization,
    calculate_payment_allocation,
)
from debtpayoff.engine.options import LumpSum, PayoffOptions
from debtpayoff.engine.scheduler import (
    PayoffResults,
    PayoffScheduler,
    PayoffSimulation,
    compute_payoff_schedule,
)
from debtpayoff.evaluation.comparison import ComparisonResult, compare_strategies

__all__ = [
    "DebtAccount",
    "LumpSum",
    "PayoffOptions",
    "PayoffResults",
    "PayoffScheduler",
    "PayoffSimulation",
    "PaymentAllocation",
    "ComparisonResult",
    "ValidationError",
    "InvalidDebt",
    "InvalidOptions",
    "compute_payoff_schedule",
    "calculate_payment_allocation",
    "calculate_credit_utilization",
    "compare_strategies",
]
