"""ScenarioSampler — random and preset debt portfolios for benchmarking.

Produces lists of DebtAccount with varied numbers of debts (1–5), APRs
(3%–29%), balances ($500–$15,000) and minimum payments sized as a share of
the balance. Also provides named presets for reproducible comparisons.
"""

from __future__ import annotations

import numpy as np

from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.utils.formatting import to_cents

# Debt name pools for variety
_DEBT_NAMES = [
    "Visa Platinum", "Mastercard Gold", "Store Card", "Rewards Card",
    "Car Loan", "Student Loan", "Medical Bill", "Personal Loan",
    "Line of Credit", "Department Store", "Airline Card", "Furniture Loan",
]

_TYPES_BY_NAME = {
    "Car Loan": "loan",
    "Personal Loan": "loan",
    "Furniture Loan": "loan",
    "Student Loan": "student_loan",
    "Line of Credit": "line_of_credit",
    "Medical Bill": "other",
}


class ScenarioSampler:
    """Generate randomized or preset debt portfolios."""

    def __init__(
        self,
        num_debts_range: tuple[int, int] = (1, 5),
        apr_range: tuple[float, float] = (3.0, 29.0),
        balance_range: tuple[float, float] = (500.0, 15000.0),
        min_payment_ratio_range: tuple[float, float] = (0.03, 0.05),
        min_payment_floor: float = 25.0,
    ):
        self.num_debts_range = num_debts_range
        self.apr_range = apr_range
        self.balance_range = balance_range
        self.min_payment_ratio_range = min_payment_ratio_range
        self.min_payment_floor = min_payment_floor

    def sample(self, rng: np.random.Generator | None = None) -> list[DebtAccount]:
        """Sample a random debt portfolio.

        Minimum payments are at least 3% of the balance, more than enough to cover
        interest at the top of the APR range, so sampled portfolios pay off.

        Args:
            rng: Numpy random Generator for reproducibility.
        """
        if rng is None:
            rng = np.random.default_rng()

        num_debts = int(rng.integers(self.num_debts_range[0], self.num_debts_range[1] + 1))
        name_indices = rng.choice(len(_DEBT_NAMES), size=num_debts, replace=False)

        debts = []
        for n, idx in enumerate(name_indices):
            name = _DEBT_NAMES[int(idx)]
            debt_type = _TYPES_BY_NAME.get(name, "credit_card")
            balance = round(float(rng.uniform(*self.balance_range)), 2)
            ratio = float(rng.uniform(*self.min_payment_ratio_range))
            min_payment = max(self.min_payment_floor, round(balance * ratio, 2))
            credit_limit = None
            if debt_type == "credit_card":
                credit_limit = to_cents(round(balance * float(rng.uniform(1.2, 3.0)), 2))
            debts.append(
                DebtAccount(
                    id=f"d{n + 1}",
                    name=name,
                    type=debt_type,
                    principal_balance=to_cents(balance),
                    apr=round(float(rng.uniform(*self.apr_range)), 2),
                    min_payment=to_cents(min_payment),
                    credit_limit=credit_limit,
                )
            )
        return debts

    @staticmethod
    def preset(name: str) -> list[DebtAccount]:
        """Return a named preset portfolio for reproducible experiments.

        Available presets:
            - "classic_3debt": 18% / 22% / 8% mix of cards and a loan
            - "similar_aprs": two debts at 10% and 11%
            - "apr_spread": a 25% card against a 5% loan
            - "underfunded": minimum payment below the monthly interest

        Raises:
            ValueError: If preset name is unknown.
        """
        presets = {
            "classic_3debt": [
                DebtAccount("visa", "Visa Platinum", 500000, 18.0, 10000, type="credit_card",
                            credit_limit=800000),
                DebtAccount("store", "Store Card", 200000, 22.0, 5000, type="credit_card",
                            credit_limit=300000),
                DebtAccount("personal", "Personal Loan", 1000000, 8.0, 20000, type="loan"),
            ],
            "similar_aprs": [
                DebtAccount("d1", "Debt 1", 100000, 10.0, 5000),
                DebtAccount("d2", "Debt 2", 200000, 11.0, 7500),
            ],
            "apr_spread": [
                DebtAccount("high", "High APR", 500000, 25.0, 10000, type="credit_card"),
                DebtAccount("low", "Low APR", 100000, 5.0, 2500, type="loan"),
            ],
            "underfunded": [
                DebtAccount("low-payment", "Low Payment", 1000000, 30.0, 1000, type="credit_card"),
            ],
        }

        if name not in presets:
            valid = ", ".join(sorted(presets.keys()))
            raise ValueError(f"Unknown preset {name!r}. Valid: {valid}")

        return presets[name]
