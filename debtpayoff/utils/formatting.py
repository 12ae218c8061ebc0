"""Conversion between integer cents and display units."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def to_cents(amount: float | int | str | Decimal) -> int:
    """Dollars (as entered by a user or in YAML) → integer cents."""
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_dollars(cents: int) -> float:
    return cents / 100.0


def format_currency(cents: int) -> str:
    """Format cents as dollars, e.g. 123456 → "$1,234.56"."""
    sign = "-" if cents < 0 else ""
    return f"{sign}${to_dollars(abs(cents)):,.2f}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_duration(months: int) -> str:
    """Format a month count as years and months, e.g. 14 → "1 year 2 months"."""
    if months <= 0:
        return "0 months"

    years, remaining = divmod(months, 12)
    if years == 0:
        return _plural(months, "month")
    if remaining == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')} {_plural(remaining, 'month')}"
