"""YAML configuration loader and dataclasses for payoff plans.

Money in YAML is written in dollars and converted to integer cents here, so
nothing past this module handles fractional currency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from debtpayoff.engine.errors import InvalidOptions
from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.engine.options import LumpSum, PayoffOptions
from debtpayoff.utils.formatting import to_cents

logger = logging.getLogger(__name__)


def _resolve_config_path(path: str | Path) -> Path:
    """Resolve a config path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # open() gives the descriptive FileNotFoundError if it is missing
            return parent / p

    return p


@dataclass
class PlanConfig:
    """A set of debts plus the repayment policy to simulate."""

    debts: list[DebtAccount] = field(default_factory=list)
    options: PayoffOptions = field(default_factory=PayoffOptions)
    start_date: date | None = None

    @property
    def num_debts(self) -> int:
        return len(self.debts)

    @property
    def total_initial_debt(self) -> int:
        return sum(d.principal_balance for d in self.debts)


def parse_month(value: Any) -> date:
    """Accept a date, datetime, "YYYY-MM" or "YYYY-MM-DD"."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if len(text) == 7:
            return datetime.strptime(text, "%Y-%m").date()
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidOptions(f"Invalid date {value!r}; expected YYYY-MM or YYYY-MM-DD") from exc


def _optional_cents(value: Any) -> int | None:
    return None if value is None else to_cents(value)


def debt_from_dict(raw: dict[str, Any], index: int = 0) -> DebtAccount:
    """Build a DebtAccount from a YAML/JSON mapping with dollar amounts."""
    debt_id = str(raw.get("id", f"debt-{index + 1}"))
    return DebtAccount(
        id=debt_id,
        name=str(raw.get("name", debt_id)),
        type=str(raw.get("type", "other")),
        currency=str(raw.get("currency", "USD")),
        principal_balance=to_cents(raw.get("balance", 0)),
        apr=float(raw.get("apr", 0.0)),
        min_payment=to_cents(raw.get("min_payment", 0)),
        credit_limit=_optional_cents(raw.get("credit_limit")),
    )


def options_from_dict(raw: dict[str, Any]) -> PayoffOptions:
    """Build PayoffOptions from a YAML/JSON mapping with dollar amounts."""
    lump_sum = None
    lump_raw = raw.get("lump_sum")
    if lump_raw:
        lump_sum = LumpSum(
            amount=to_cents(lump_raw.get("amount", 0)),
            date=parse_month(lump_raw["date"]),
        )

    custom_order = raw.get("custom_order")
    return PayoffOptions(
        method=str(raw.get("method", "avalanche")),
        extra_per_month=to_cents(raw.get("extra_per_month", 0)),
        lump_sum=lump_sum,
        round_up_to_nearest=_optional_cents(raw.get("round_up_to_nearest")),
        keep_minimums=bool(raw.get("keep_minimums", True)),
        custom_order=tuple(str(i) for i in custom_order) if custom_order else None,
    )


def load_debts_config(path: str | Path) -> PlanConfig:
    """Load a PlanConfig from a YAML file.

    Args:
        path: Path to a YAML plan (e.g., configs/debts/default_3debt.yaml).

    Returns:
        Populated PlanConfig instance.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    debts = [debt_from_dict(d, i) for i, d in enumerate(raw.get("debts", []))]
    options = options_from_dict(raw.get("options", {}) or {})
    start_date = parse_month(raw["start_date"]) if raw.get("start_date") else None

    logger.debug("Loaded %d debts from %s", len(debts), path)
    return PlanConfig(debts=debts, options=options, start_date=start_date)


def load_eval_config(path: str | Path) -> dict[str, Any]:
    """Load the benchmark protocol from a YAML file."""
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        return yaml.safe_load(f)
