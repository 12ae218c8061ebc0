"""Payoff milestones — one celebration per debt, the month it reaches zero."""

from __future__ import annotations

from dataclasses import dataclass

from debtpayoff.engine.month_step import DebtSnapshot, PayoffStep


@dataclass(frozen=True)
class PayoffMilestone:
    month: int
    debt_id: str
    debt_name: str
    message: str
    celebration: bool = True


def payoff_message(debt_name: str) -> str:
    return f"🎉 {debt_name} is paid off!"


def _was_paid_off(previous: PayoffStep | None, snapshot: DebtSnapshot) -> bool:
    if previous is None:
        # Month 1: only debts that started at zero were already paid off
        return snapshot.starting_balance <= 0
    prior = previous.snapshot_for(snapshot.debt_id)
    return prior is not None and prior.paid_off


def detect_milestones(previous: PayoffStep | None, current: PayoffStep) -> list[PayoffMilestone]:
    """Emit a milestone for every debt whose paid_off flag flips this step.

    Pure function of two consecutive steps; a debt already paid off in
    `previous` never produces a second milestone.

    Args:
        previous: The prior month's step, or None when `current` is month 1.
        current: The step just produced.

    Returns:
        Milestones in the order debts appear in `current`.
    """
    milestones = []
    for snapshot in current.debts:
        if snapshot.paid_off and not _was_paid_off(previous, snapshot):
            milestones.append(
                PayoffMilestone(
                    month=current.month,
                    debt_id=snapshot.debt_id,
                    debt_name=snapshot.debt_name,
                    message=payoff_message(snapshot.debt_name),
                )
            )
    return milestones
