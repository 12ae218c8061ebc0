"""Run every strategy on randomized portfolios and produce a benchmark CSV.

Usage:
    python scripts/run_benchmark.py                          # Full: 1000 scenarios × 5 seeds
    python scripts/run_benchmark.py --quick                  # Dev:  50 scenarios × 1 seed
    python scripts/run_benchmark.py --config configs/eval/eval_protocol.yaml
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pandas as pd

from debtpayoff.engine.baseline import calculate_baseline
from debtpayoff.engine.options import PayoffOptions
from debtpayoff.engine.scenario_sampler import ScenarioSampler
from debtpayoff.engine.scheduler import PayoffScheduler
from debtpayoff.evaluation.comparison import recommend
from debtpayoff.utils.config import load_eval_config
from debtpayoff.utils.formatting import to_cents, to_dollars

STRATEGIES = ["avalanche", "snowball", "custom"]


def run_benchmark(
    num_scenarios: int = 1000,
    seeds: list[int] | None = None,
    extra_levels: list[float] | None = None,
    output_dir: str = "results",
) -> pd.DataFrame:
    """Run all strategies across seeds × scenarios × extra-payment levels.

    The custom strategy uses the portfolio's input order, a stand-in for a
    user who never reorders their list.

    Returns:
        DataFrame with one row per (seed, scenario, extra, strategy).
    """
    if seeds is None:
        seeds = [42]
    if extra_levels is None:
        extra_levels = [0, 100, 250, 500]

    sampler = ScenarioSampler()
    scheduler = PayoffScheduler()
    rows: list[dict] = []

    total_runs = len(seeds) * num_scenarios * len(extra_levels) * len(STRATEGIES)
    completed = 0
    t0 = time.time()

    for seed in seeds:
        rng = np.random.default_rng(seed)
        scenarios = [sampler.sample(rng) for _ in range(num_scenarios)]

        for idx, debts in enumerate(scenarios):
            # One baseline per portfolio, shared by every run on it
            baseline = calculate_baseline(debts)
            for extra in extra_levels:
                for method in STRATEGIES:
                    options = PayoffOptions(
                        method=method,
                        extra_per_month=to_cents(extra),
                        custom_order=tuple(d.id for d in debts) if method == "custom" else None,
                    )
                    results = scheduler.run(debts, options, baseline=baseline).results
                    rows.append({
                        "seed": seed,
                        "scenario": idx,
                        "num_debts": len(debts),
                        "initial_debt": to_dollars(sum(d.principal_balance for d in debts)),
                        "extra": extra,
                        "strategy": method,
                        "months": results.months_to_debt_free,
                        "total_interest": to_dollars(results.total_interest_paid),
                        "interest_saved": to_dollars(results.interest_saved),
                        "months_saved": results.months_saved,
                        "converged": results.converged,
                    })

                    completed += 1
                    if completed % 2000 == 0:
                        elapsed = time.time() - t0
                        rate = completed / elapsed if elapsed > 0 else 0
                        eta = (total_runs - completed) / rate if rate > 0 else 0
                        print(
                            f"  [{completed}/{total_runs}] "
                            f"{elapsed:.0f}s elapsed, ~{eta:.0f}s remaining"
                        )

    df = pd.DataFrame(rows)

    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_path = out_path / "benchmark_per_scenario.csv"
    df.to_csv(csv_path, index=False)
    print(f"\nPer-scenario results saved to {csv_path}")

    return df


def print_summary(df: pd.DataFrame) -> None:
    """Print summary stats grouped by extra level and strategy."""
    summary_rows = []
    for (extra, strategy), group in df.groupby(["extra", "strategy"], sort=False):
        summary_rows.append({
            "Extra": f"${extra:,.0f}",
            "Strategy": strategy,
            "Interest (mean±std)": f"${group['total_interest'].mean():,.0f} ± ${group['total_interest'].std():,.0f}",
            "Months (mean±std)": f"{group['months'].mean():.1f} ± {group['months'].std():.1f}",
            "Saved vs min (mean)": f"${group['interest_saved'].mean():,.0f}",
            "Paid Off %": f"{group['converged'].mean() * 100:.1f}%",
        })
    summary = pd.DataFrame(summary_rows)
    print("\n" + "=" * 90)
    print("  STRATEGY COMPARISON — Summary Statistics")
    print("=" * 90)
    print(summary.to_string(index=False))
    print()


def sanity_checks(df: pd.DataFrame) -> None:
    """Run sanity checks on benchmark results."""
    print("Sanity checks:")

    # Check 1: Avalanche should never cost more interest than snowball
    pivot = df.pivot_table(
        index=["seed", "scenario", "extra"], columns="strategy", values="total_interest"
    )
    worse = int((pivot["avalanche"] > pivot["snowball"] + 0.01).sum())
    if worse == 0:
        print("  [PASS] Avalanche interest <= Snowball interest in every scenario")
    else:
        print(f"  [NOTE] Avalanche cost more than Snowball in {worse} scenarios")

    # Check 2: savings are never negative
    if (df["interest_saved"] >= 0).all() and (df["months_saved"] >= 0).all():
        print("  [PASS] Savings versus minimum payments are never negative")
    else:
        print("  [FAIL] Negative savings found. Possible engine bug.")

    # Check 3: how often the 3% rule picks avalanche
    picks = [
        recommend(round((row["snowball"] - row["avalanche"]) * 100), round(row["avalanche"] * 100))
        for _, row in pivot.iterrows()
    ]
    share = picks.count("avalanche") / len(picks) if picks else 0.0
    print(f"  [INFO] Avalanche recommended in {share:.1%} of scenario/extra pairs")
    print()


def main():
    parser = argparse.ArgumentParser(description="Run payoff strategy benchmark")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/eval/eval_protocol.yaml",
        help="Path to eval protocol YAML",
    )
    parser.add_argument("--quick", action="store_true", help="Quick run: 50 scenarios, 1 seed")
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    eval_cfg = load_eval_config(args.config)
    extra_levels = eval_cfg.get("extra_levels", [0, 100, 250, 500])

    if args.quick:
        num_scenarios = 50
        seeds = [42]
        print("Quick mode: 50 scenarios × 1 seed")
    else:
        num_scenarios = eval_cfg.get("num_scenarios", 1000)
        seeds = eval_cfg.get("seeds", [42, 123, 456, 789, 1024])
        print(f"Full mode: {num_scenarios} scenarios × {len(seeds)} seeds")

    print(f"Running {len(STRATEGIES)} strategies at {len(extra_levels)} extra levels...\n")
    df = run_benchmark(
        num_scenarios=num_scenarios,
        seeds=seeds,
        extra_levels=extra_levels,
        output_dir=args.output,
    )

    print_summary(df)
    sanity_checks(df)


if __name__ == "__main__":
    main()
