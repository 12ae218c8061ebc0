"""Financial model for debt payoff simulation.

Implements the core money math, all in integer cents:
- APR → monthly interest charge (half-up rounded to the cent)
- Splitting a payment into interest and principal
- Rounding payments up to a friendly unit
- Single-payment allocation preview (monthly or daily compounding)
- Utilization and weighted APR helpers
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from debtpayoff.engine.errors import InvalidDebt, InvalidOptions

DEBT_TYPES = ("credit_card", "loan", "line_of_credit", "student_loan", "other")
COMPOUNDING_MODES = ("monthly", "daily")

DAYS_PER_YEAR = 365
DAYS_PER_STATEMENT = 30  # Simplified billing cycle for daily compounding


@dataclass(frozen=True)
class DebtAccount:
    """Immutable debt record supplied by the caller."""

    id: str
    name: str
    principal_balance: int      # Cents
    apr: float                  # Annual percentage rate, 0–100 (e.g., 21.9)
    min_payment: int            # Cents
    type: str = "other"
    currency: str = "USD"
    credit_limit: int | None = None  # Cents, credit cards only

    @property
    def rate(self) -> float:
        """APR as a fraction (21.9 → 0.219)."""
        return self.apr / 100.0

    @property
    def monthly_rate(self) -> float:
        """APR ÷ 12 — simple periodic rate."""
        return self.rate / 12.0


@dataclass(frozen=True)
class DebtState:
    """Per-debt simulation state. A new instance is produced every month."""

    debt_id: str
    current_balance: int
    paid_off: bool = False

    @classmethod
    def from_account(cls, debt: DebtAccount) -> DebtState:
        return cls(
            debt_id=debt.id,
            current_balance=debt.principal_balance,
            paid_off=debt.principal_balance <= 0,
        )


@dataclass(frozen=True)
class PaymentAllocation:
    """How one payment splits across fees, interest and principal (cents)."""

    interest: int
    principal: int
    fees: int


def validate_debt(debt: DebtAccount) -> None:
    """Raise InvalidDebt if the record breaks a DebtAccount invariant."""
    if not str(debt.id).strip():
        raise InvalidDebt("Debt id must not be blank")
    if debt.type not in DEBT_TYPES:
        raise InvalidDebt(f"Unknown debt type {debt.type!r} for debt {debt.id!r}")
    if debt.principal_balance < 0:
        raise InvalidDebt(f"Debt {debt.id!r} has a negative balance")
    if not 0 <= debt.apr <= 100:
        raise InvalidDebt(f"Debt {debt.id!r} APR must be between 0 and 100, got {debt.apr}")
    if debt.min_payment < 0:
        raise InvalidDebt(f"Debt {debt.id!r} has a negative minimum payment")
    if debt.credit_limit is not None and debt.credit_limit < 0:
        raise InvalidDebt(f"Debt {debt.id!r} has a negative credit limit")


def validate_debts(debts: Iterable[DebtAccount]) -> list[DebtAccount]:
    """Validate every record and reject duplicate ids.

    Returns:
        The debts as a list, in input order.
    """
    debts = list(debts)
    seen: set[str] = set()
    for debt in debts:
        validate_debt(debt)
        if debt.id in seen:
            raise InvalidDebt(f"Duplicate debt id {debt.id!r}")
        seen.add(debt.id)
    return debts


def _to_cents(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_interest(balance: int, apr: float) -> int:
    """Compute one month of interest on a balance.

    Formula: I_t = B_t × (APR / 100) / 12, rounded half-up to the cent.

    Returns:
        Interest in cents (≥ 0). Zero for a zero or negative balance.
    """
    if balance <= 0 or apr <= 0:
        return 0
    return _to_cents(Decimal(balance) * Decimal(str(apr)) / Decimal(1200))


def compute_daily_interest(balance: int, apr: float, days: int = DAYS_PER_STATEMENT) -> int:
    """Interest over a statement using a daily periodic rate (APR / 365)."""
    if balance <= 0 or apr <= 0:
        return 0
    daily = Decimal(str(apr)) / Decimal(100 * DAYS_PER_YEAR)
    return _to_cents(Decimal(balance) * daily * Decimal(days))


def round_up_payment(payment: int, unit: int | None) -> int:
    """Round a payment up to the next multiple of `unit` cents.

    `None` or a non-positive unit leaves the payment unchanged.
    """
    if not unit or unit <= 0 or payment <= 0:
        return payment
    return -(-payment // unit) * unit


def split_payment(starting_balance: int, interest_charge: int, payment: int) -> tuple[int, int, int]:
    """Split a payment into (interest_portion, principal_portion, ending_balance).

    Interest the payment does not cover is capitalised, so the principal
    portion goes negative and the balance grows (negative amortization).
    The ending balance is floored at 0.
    """
    interest_portion = min(interest_charge, payment)
    principal_portion = payment - interest_charge
    ending_balance = max(0, starting_balance - principal_portion)
    return interest_portion, principal_portion, ending_balance


def calculate_payment_allocation(
    debt: DebtAccount,
    payment_amount: int,
    compounding: str = "monthly",
) -> PaymentAllocation:
    """Preview how a single payment would be applied to a debt this month.

    Allocation order: fees first, then interest, then principal. Fees are
    always zero in this model. Does not mutate anything.

    Args:
        debt: The debt being paid.
        payment_amount: Payment in cents.
        compounding: "monthly" (APR / 12) or "daily" (APR / 365 over 30 days).

    Raises:
        InvalidOptions: Unknown compounding mode or negative payment.
    """
    if compounding not in COMPOUNDING_MODES:
        raise InvalidOptions(f"Unknown compounding mode: {compounding!r}")
    if payment_amount < 0:
        raise InvalidOptions("Payment amount must not be negative")

    balance = debt.principal_balance
    if compounding == "daily":
        interest_charge = compute_daily_interest(balance, debt.apr)
    else:
        interest_charge = compute_interest(balance, debt.apr)

    fees = 0
    fees_allocation = min(payment_amount, fees)
    remaining = payment_amount - fees_allocation
    interest_allocation = min(remaining, interest_charge)

    return PaymentAllocation(
        interest=interest_allocation,
        principal=remaining - interest_allocation,
        fees=fees_allocation,
    )


def calculate_credit_utilization(debts: Iterable[DebtAccount]) -> float:
    """Percent of combined credit limit used by credit cards.

    Only credit cards with a positive limit count. Returns 0 if there are none.
    """
    cards = [
        d for d in debts
        if d.type == "credit_card" and d.credit_limit and d.credit_limit > 0
    ]
    total_limit = sum(c.credit_limit for c in cards)
    if total_limit <= 0:
        return 0.0
    total_balance = sum(c.principal_balance for c in cards)
    return total_balance / total_limit * 100.0


def compute_weighted_avg_apr(debts: Iterable[DebtAccount]) -> float:
    """Balance-weighted average APR (percent).

    Returns 0 if total balance is 0.
    """
    debts = list(debts)
    total_balance = sum(d.principal_balance for d in debts)
    if total_balance <= 0:
        return 0.0
    return sum(d.apr * d.principal_balance for d in debts) / total_balance
