"""Shared fixtures for the payoff engine tests."""

from datetime import date

import pytest

from debtpayoff.engine.financial_model import DebtAccount


@pytest.fixture
def start() -> date:
    return date(2025, 1, 1)


@pytest.fixture
def classic_debts() -> list[DebtAccount]:
    """$5000 @ 18%, $2000 @ 22%, $10000 @ 8% with $100 / $50 / $200 minimums."""
    return [
        DebtAccount("visa", "Credit Card 1", 500000, 18.0, 10000, type="credit_card",
                    credit_limit=800000),
        DebtAccount("store", "Credit Card 2", 200000, 22.0, 5000, type="credit_card",
                    credit_limit=300000),
        DebtAccount("personal", "Personal Loan", 1000000, 8.0, 20000, type="loan"),
    ]


@pytest.fixture
def underfunded_debt() -> list[DebtAccount]:
    """$10,000 at 30% APR with a $10 minimum: interest is $250/month."""
    return [DebtAccount("low", "Low Payment", 1000000, 30.0, 1000, type="credit_card")]
