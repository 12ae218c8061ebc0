"""Plot remaining balance per debt over time for a payoff plan.

Usage:
    python scripts/plot_payoff.py
    python scripts/plot_payoff.py --config configs/debts/default_3debt.yaml --method snowball
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import pandas as pd

from debtpayoff.engine.scheduler import compute_payoff_schedule
from debtpayoff.evaluation.reports import milestones_to_frame, timeline_to_frame
from debtpayoff.utils.config import load_debts_config
from debtpayoff.utils.formatting import to_dollars


def make_balance_plot(
    df: pd.DataFrame,
    title: str,
    milestones: pd.DataFrame | None = None,
    output_path: str = "results/payoff_balances.png",
) -> None:
    """Stacked area of ending balance per debt, with payoff months marked."""
    dollars = df.assign(ending_balance=df["ending_balance"].apply(to_dollars))
    balances = (
        dollars.pivot_table(index="month", columns="debt_name", values="ending_balance", sort=False)
        .fillna(0)
    )

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.stackplot(balances.index, balances.T.values, labels=balances.columns, alpha=0.8)

    if milestones is not None:
        for _, m in milestones.iterrows():
            ax.axvline(m["month"], color="black", linestyle=":", linewidth=1, alpha=0.6)
            ax.annotate(
                m["debt_name"], xy=(m["month"], ax.get_ylim()[1] * 0.95),
                rotation=90, fontsize=8, va="top", ha="right",
            )

    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.set_xlabel("Month")
    ax.set_ylabel("Remaining balance ($)")
    ax.legend(loc="upper right")
    ax.grid(axis="y", alpha=0.3)
    plt.tight_layout()

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Balance plot saved to {out}")


def main():
    parser = argparse.ArgumentParser(description="Plot a payoff plan's balances")
    parser.add_argument("--config", type=str, default="configs/debts/default_3debt.yaml")
    parser.add_argument("--method", type=str, default=None, help="Override the plan's method")
    parser.add_argument("--output", type=str, default="results/payoff_balances.png")
    args = parser.parse_args()

    plan = load_debts_config(args.config)
    options = replace(plan.options, method=args.method) if args.method else plan.options

    simulation = compute_payoff_schedule(plan.debts, options, plan.start_date)
    df = timeline_to_frame(simulation)
    if df.empty:
        print("Nothing to plot: every debt already has a zero balance.")
        sys.exit(0)

    make_balance_plot(
        df,
        title=f"Payoff timeline ({simulation.method})",
        milestones=milestones_to_frame(simulation),
        output_path=args.output,
    )


if __name__ == "__main__":
    main()
