"""ComparisonReporter — avalanche vs snowball with a recommendation.

Avalanche is recommended only when it saves strictly more than 3% of its own
interest cost compared with snowball; otherwise snowball wins for its quicker
early payoffs. The threshold is a fixed business rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from debtpayoff.engine.baseline import calculate_baseline
from debtpayoff.engine.errors import InvalidOptions
from debtpayoff.engine.financial_model import DebtAccount, validate_debts
from debtpayoff.engine.options import PayoffOptions
from debtpayoff.engine.scheduler import PayoffScheduler, PayoffSimulation
from debtpayoff.strategies import AvalancheStrategy, SnowballStrategy
from debtpayoff.utils.formatting import format_currency

RECOMMENDATION_THRESHOLD = Decimal("0.03")


@dataclass(frozen=True)
class StrategySummary:
    total_months: int
    total_interest: int
    simulation: PayoffSimulation

    @classmethod
    def from_simulation(cls, simulation: PayoffSimulation) -> StrategySummary:
        return cls(
            total_months=simulation.results.months_to_debt_free,
            total_interest=simulation.results.total_interest_paid,
            simulation=simulation,
        )


@dataclass(frozen=True)
class Savings:
    """Snowball minus avalanche. Negative means snowball is cheaper/faster."""

    interest: int
    months: int


@dataclass(frozen=True)
class ComparisonResult:
    avalanche: StrategySummary
    snowball: StrategySummary
    recommendation: str
    savings: Savings


def recommend(savings_interest: int, avalanche_interest: int) -> str:
    """Apply the 3% rule: savings / avalanche_interest > 0.03 → avalanche.

    Written as a multiplication so zero avalanche interest needs no division.
    """
    if Decimal(savings_interest) > RECOMMENDATION_THRESHOLD * Decimal(avalanche_interest):
        return "avalanche"
    return "snowball"


def compare_strategies(
    debts: Iterable[DebtAccount],
    extra_per_month: int,
    start_date: date | None = None,
) -> ComparisonResult:
    """Run avalanche and snowball with the same extra payment and compare.

    Both runs redistribute freed minimum payments and share one baseline.
    """
    debts = validate_debts(debts)
    if not debts:
        raise InvalidOptions("At least one debt is required")

    scheduler = PayoffScheduler()
    baseline = calculate_baseline(debts, scheduler.max_months)

    runs = {}
    for method in ("avalanche", "snowball"):
        options = PayoffOptions(method=method, extra_per_month=extra_per_month)
        runs[method] = StrategySummary.from_simulation(
            scheduler.run(debts, options, start_date, baseline=baseline)
        )

    avalanche, snowball = runs["avalanche"], runs["snowball"]
    savings = Savings(
        interest=snowball.total_interest - avalanche.total_interest,
        months=snowball.total_months - avalanche.total_months,
    )
    return ComparisonResult(
        avalanche=avalanche,
        snowball=snowball,
        recommendation=recommend(savings.interest, avalanche.total_interest),
        savings=savings,
    )


def describe_strategies(debts: Iterable[DebtAccount], extra_per_month: int = 10000) -> dict[str, str]:
    """Short explanations of each method using the caller's own debts.

    Returns:
        Dict with "avalanche", "snowball" and "comparison" sentences.
    """
    debts = list(debts)
    if not debts:
        return {
            "avalanche": "Add your debts to see personalized examples",
            "snowball": "Add your debts to see personalized examples",
            "comparison": "Add your debts to see savings comparison",
        }

    highest_apr = AvalancheStrategy().order(debts)[0]
    smallest = SnowballStrategy().order(debts)[0]
    comparison = compare_strategies(debts, extra_per_month)

    difference = abs(comparison.savings.interest)
    cheaper = "Avalanche" if comparison.savings.interest >= 0 else "Snowball"
    return {
        "avalanche": (
            f"With your debts, Avalanche targets {highest_apr.name} first ({highest_apr.apr:g}% APR)"
        ),
        "snowball": (
            f"Snowball targets {smallest.name} first "
            f"({format_currency(smallest.principal_balance)} balance)"
        ),
        "comparison": (
            f"Adding {format_currency(extra_per_month)}/month extra: "
            f"{cheaper} saves {format_currency(difference)} in interest"
        ),
    }
