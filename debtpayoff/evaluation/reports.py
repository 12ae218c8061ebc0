"""Tabular exports and text statements for payoff simulations."""

from __future__ import annotations

import pandas as pd

from debtpayoff.engine.scheduler import PayoffSimulation
from debtpayoff.evaluation.comparison import ComparisonResult
from debtpayoff.utils.formatting import format_currency, format_duration

TIMELINE_COLUMNS = [
    "month", "month_name", "debt_id", "debt_name", "starting_balance",
    "interest_charge", "payment", "interest_portion", "principal_portion",
    "ending_balance", "paid_off",
]


def timeline_to_frame(simulation: PayoffSimulation) -> pd.DataFrame:
    """One row per (month, debt), amounts in cents."""
    rows = [
        {
            "month": step.month,
            "month_name": step.month_name,
            "debt_id": snap.debt_id,
            "debt_name": snap.debt_name,
            "starting_balance": snap.starting_balance,
            "interest_charge": snap.interest_charge,
            "payment": snap.payment,
            "interest_portion": snap.interest_portion,
            "principal_portion": snap.principal_portion,
            "ending_balance": snap.ending_balance,
            "paid_off": snap.paid_off,
        }
        for step in simulation.results.timeline
        for snap in step.debts
    ]
    return pd.DataFrame(rows, columns=TIMELINE_COLUMNS)


def milestones_to_frame(simulation: PayoffSimulation) -> pd.DataFrame:
    rows = [
        {"month": m.month, "debt_id": m.debt_id, "debt_name": m.debt_name, "message": m.message}
        for m in simulation.results.milestones
    ]
    return pd.DataFrame(rows, columns=["month", "debt_id", "debt_name", "message"])


def comparison_to_frame(comparison: ComparisonResult) -> pd.DataFrame:
    """Two-row summary (avalanche, snowball) for side-by-side display."""
    rows = []
    for summary in (comparison.avalanche, comparison.snowball):
        results = summary.simulation.results
        rows.append({
            "strategy": summary.simulation.method,
            "months": summary.total_months,
            "total_interest": summary.total_interest,
            "interest_saved": results.interest_saved,
            "months_saved": results.months_saved,
            "converged": results.converged,
            "recommended": summary.simulation.method == comparison.recommendation,
        })
    return pd.DataFrame(rows)


def render_simulation(simulation: PayoffSimulation, max_months: int | None = None) -> str:
    """Human-readable month-by-month statement.

    Args:
        simulation: A completed simulation.
        max_months: Only render the first N months if given.
    """
    results = simulation.results
    lines = []
    for step in results.timeline[:max_months]:
        lines.append(f"\n{'='*72}")
        lines.append(f"  Month {step.month}: {step.month_name}")
        lines.append(f"{'='*72}")
        for snap in step.debts:
            status = "✓ PAID OFF" if snap.paid_off else format_currency(snap.ending_balance)
            lines.append(
                f"  {snap.debt_name:.<24s} Balance: {status:>12s}  "
                f"Interest: {format_currency(snap.interest_charge):>10s}  "
                f"Payment: {format_currency(snap.payment):>10s}"
            )
        lines.append(f"  {'─'*68}")
        lines.append(
            f"  Paid: {format_currency(step.total_payment)}  "
            f"Interest: {format_currency(step.total_interest)}  "
            f"Remaining: {format_currency(step.remaining_debt)}"
        )

    lines.append("")
    if results.converged:
        lines.append(
            f"Debt free in {format_duration(results.months_to_debt_free)} "
            f"({simulation.method}), total interest {format_currency(results.total_interest_paid)}"
        )
    else:
        lines.append(
            f"NOT debt free after {format_duration(results.months_to_debt_free)}: "
            f"interest exceeds the minimum payment on at least one debt"
        )
    lines.append(
        f"Saves {format_currency(results.interest_saved)} and "
        f"{format_duration(results.months_saved)} versus minimum payments"
    )
    return "\n".join(lines)
