"""Exceptions raised when payoff inputs are malformed.

Validation always happens before the first simulated month, so a caller either
gets a complete result or one of these errors, never a partial schedule.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Base class for rejected payoff inputs."""


class InvalidOptions(ValidationError):
    """Payoff options (or the debt list as a whole) cannot be simulated."""


class InvalidDebt(InvalidOptions):
    """A debt record breaks one of the DebtAccount invariants.

    Subclasses InvalidOptions so ``except InvalidOptions`` around
    compute_payoff_schedule also catches bad debt records.
    """
