"""Sanity check — print a plan's schedule, milestones and strategy comparison.

Usage:
    python scripts/sanity_check.py
    python scripts/sanity_check.py --config configs/debts/underfunded_card.yaml --months 6
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from debtpayoff.engine.scheduler import compute_payoff_schedule
from debtpayoff.evaluation.comparison import compare_strategies, describe_strategies
from debtpayoff.evaluation.reports import comparison_to_frame, render_simulation
from debtpayoff.utils.config import load_debts_config
from debtpayoff.utils.formatting import format_currency


def main():
    parser = argparse.ArgumentParser(description="Sanity check: walk through a payoff plan")
    parser.add_argument("--config", type=str, default="configs/debts/default_3debt.yaml")
    parser.add_argument("--months", type=int, default=12, help="Months of statement to print")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    plan = load_debts_config(args.config)
    simulation = compute_payoff_schedule(plan.debts, plan.options, plan.start_date)

    print(f"\n{'#'*72}")
    print(f"  PLAN: {plan.num_debts} debts, {format_currency(plan.total_initial_debt)} total")
    print(f"{'#'*72}")
    print(render_simulation(simulation, max_months=args.months))

    if not simulation.results.converged:
        print("\n  ⚠️ WARNING: this debt cannot be paid off under minimum payments —")
        print("     interest exceeds the minimum payment.")

    print("\nMilestones:")
    for m in simulation.results.milestones:
        print(f"  Month {m.month:>3d}: {m.message}")

    comparison = compare_strategies(
        plan.debts, plan.options.extra_per_month, plan.start_date
    )
    print("\nAvalanche vs Snowball:")
    print(comparison_to_frame(comparison).to_string(index=False))
    print(f"\n  Recommendation: {comparison.recommendation}")
    for line in describe_strategies(plan.debts).values():
        print(f"  {line}")


if __name__ == "__main__":
    main()
