"""Tests for the full payoff scheduler: termination, conservation and savings."""

import locale
from dataclasses import replace
from datetime import date

import pytest

from debtpayoff.engine.baseline import MAX_MONTHS, calculate_baseline
from debtpayoff.engine.errors import InvalidDebt, InvalidOptions, ValidationError
from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.engine.options import LumpSum, PayoffOptions
from debtpayoff.engine.scheduler import (
    PayoffScheduler,
    add_months,
    compute_payoff_schedule,
    month_label,
)


def avalanche(extra_dollars: int = 200, **kwargs) -> PayoffOptions:
    return PayoffOptions(method="avalanche", extra_per_month=extra_dollars * 100, **kwargs)


# ── Validation ────────────────────────────────────────────────────────────

class TestValidation:

    def test_empty_debts(self, start):
        with pytest.raises(InvalidOptions):
            compute_payoff_schedule([], avalanche(), start)

    def test_negative_apr(self, start):
        debts = [DebtAccount("a", "A", 1000, -1.0, 100)]
        with pytest.raises(InvalidOptions):
            compute_payoff_schedule(debts, avalanche(), start)

    def test_negative_min_payment(self, start):
        debts = [DebtAccount("a", "A", 1000, 5.0, -100)]
        with pytest.raises(InvalidOptions):
            compute_payoff_schedule(debts, avalanche(), start)

    def test_bad_debt_is_invalid_options(self):
        assert issubclass(InvalidDebt, InvalidOptions)
        assert issubclass(InvalidOptions, ValidationError)

    def test_custom_without_order(self, classic_debts, start):
        with pytest.raises(InvalidOptions):
            compute_payoff_schedule(classic_debts, PayoffOptions(method="custom"), start)

    def test_custom_with_unknown_ids_only(self, classic_debts, start):
        options = PayoffOptions(method="custom", custom_order=("nope",))
        with pytest.raises(InvalidOptions):
            compute_payoff_schedule(classic_debts, options, start)

    @pytest.mark.parametrize("options", [
        PayoffOptions(method="lottery"),
        PayoffOptions(extra_per_month=-1),
        PayoffOptions(round_up_to_nearest=0),
        PayoffOptions(lump_sum=LumpSum(amount=-5, date=date(2025, 3, 1))),
    ])
    def test_bad_options(self, classic_debts, start, options):
        with pytest.raises(InvalidOptions):
            compute_payoff_schedule(classic_debts, options, start)


# ── Concrete scenario ─────────────────────────────────────────────────────

class TestAvalancheScenario:

    def test_highest_apr_gets_extra_first(self, classic_debts, start):
        sim = compute_payoff_schedule(classic_debts, avalanche(200), start)
        first = sim.results.timeline[0]
        assert first.snapshot_for("store").payment == 5000 + 20000
        assert first.snapshot_for("visa").payment == 10000
        assert first.snapshot_for("personal").payment == 20000
        assert first.extra_applied == 20000

    def test_highest_apr_paid_off_first(self, classic_debts, start):
        sim = compute_payoff_schedule(classic_debts, avalanche(200), start)
        milestones = sim.results.milestones
        assert milestones[0].debt_id == "store"
        assert milestones[0].celebration is True
        assert "Credit Card 2" in milestones[0].message

    def test_one_milestone_per_debt(self, classic_debts, start):
        sim = compute_payoff_schedule(classic_debts, avalanche(200), start)
        assert sorted(m.debt_id for m in sim.results.milestones) == ["personal", "store", "visa"]
        assert sim.results.milestones[-1].month == sim.results.months_to_debt_free

    def test_options_echoed(self, classic_debts, start):
        options = avalanche(200)
        sim = compute_payoff_schedule(classic_debts, options, start)
        assert sim.options is options
        assert sim.method == "avalanche"
        assert sim.results.converged is True


# ── Properties ────────────────────────────────────────────────────────────

class TestProperties:

    def test_conservation(self, classic_debts, start):
        """Principal paid on a cleared debt equals its original balance."""
        sim = compute_payoff_schedule(classic_debts, avalanche(200), start)
        payoff_month = {m.debt_id: m.month for m in sim.results.milestones}

        for debt in classic_debts:
            month = payoff_month[debt.id]
            snaps = [step.snapshot_for(debt.id) for step in sim.results.timeline[:month]]
            assert sum(s.principal_portion for s in snaps) == debt.principal_balance
            assert snaps[-1].ending_balance == 0
            assert snaps[-1].paid_off is True

    def test_no_overpayment(self, classic_debts, start):
        options = avalanche(300, round_up_to_nearest=2500)
        sim = compute_payoff_schedule(classic_debts, options, start)
        for step in sim.results.timeline:
            for snap in step.debts:
                assert snap.payment <= snap.starting_balance + snap.interest_charge
                assert snap.ending_balance >= 0

    def test_step_totals_balance(self, classic_debts, start):
        sim = compute_payoff_schedule(classic_debts, avalanche(200), start)
        for step in sim.results.timeline:
            assert step.total_payment == step.total_interest + step.total_principal
        assert sim.results.total_paid == sum(d.principal_balance for d in classic_debts) + (
            sim.results.total_interest_paid
        )

    @pytest.mark.parametrize("method", ["avalanche", "snowball"])
    def test_monotonic_in_extra(self, classic_debts, start, method):
        """More extra per month never means more months or more interest."""
        previous = None
        for extra in (0, 50, 100, 200, 500, 1000):
            options = PayoffOptions(method=method, extra_per_month=extra * 100)
            results = compute_payoff_schedule(classic_debts, options, start).results
            if previous is not None:
                assert results.months_to_debt_free <= previous.months_to_debt_free
                assert results.total_interest_paid <= previous.total_interest_paid
            previous = results

    def test_savings_never_negative(self, classic_debts, start):
        worst_first = PayoffOptions(
            method="custom", custom_order=("personal", "visa", "store"), keep_minimums=False
        )
        for options in (avalanche(0), avalanche(200), worst_first):
            results = compute_payoff_schedule(classic_debts, options, start).results
            assert results.interest_saved >= 0
            assert results.months_saved >= 0

    def test_minimums_only_matches_baseline(self, classic_debts, start):
        options = avalanche(0, keep_minimums=False)
        results = compute_payoff_schedule(classic_debts, options, start).results
        baseline = calculate_baseline(classic_debts)
        assert results.total_interest_paid == baseline.total_interest
        assert results.months_to_debt_free == baseline.months
        assert results.interest_saved == 0
        assert results.months_saved == 0

    def test_savings_against_baseline(self, classic_debts, start):
        results = compute_payoff_schedule(classic_debts, avalanche(200), start).results
        assert results.interest_saved == results.baseline_interest - results.total_interest_paid
        assert results.months_saved == results.baseline_months - results.months_to_debt_free
        assert results.interest_saved > 0
        assert results.months_saved > 0


# ── Non-convergence ───────────────────────────────────────────────────────

class TestNonConvergence:

    def test_halts_at_cap(self, underfunded_debt, start):
        results = compute_payoff_schedule(underfunded_debt, avalanche(0), start).results
        assert results.months_to_debt_free == MAX_MONTHS == 600
        assert len(results.timeline) == 600
        assert results.converged is False
        assert results.debt_free_date is None
        assert results.milestones == []
        assert results.timeline[-1].remaining_debt > 0

    def test_balance_strictly_increases(self, underfunded_debt, start):
        results = compute_payoff_schedule(underfunded_debt, avalanche(0), start).results
        balances = [step.remaining_debt for step in results.timeline]
        assert balances[0] > 1000000
        assert all(later > earlier for earlier, later in zip(balances, balances[1:]))

    def test_custom_cap(self, underfunded_debt, start):
        sim = PayoffScheduler(max_months=24).run(underfunded_debt, avalanche(0), start)
        assert sim.results.months_to_debt_free == 24
        assert sim.results.converged is False

    def test_logs_warning(self, underfunded_debt, start, caplog):
        with caplog.at_level("WARNING", logger="debtpayoff.engine.scheduler"):
            compute_payoff_schedule(underfunded_debt, avalanche(0), start)
        assert "not paid off" in caplog.text


# ── Edge cases ────────────────────────────────────────────────────────────

class TestEdgeCases:

    def test_all_zero_balances(self, classic_debts, start):
        zeroed = [replace(d, principal_balance=0) for d in classic_debts]
        results = compute_payoff_schedule(zeroed, avalanche(100), start).results
        assert results.months_to_debt_free == 0
        assert results.total_interest_paid == 0
        assert results.timeline == []
        assert results.milestones == []
        assert results.converged is True

    def test_zero_balance_debt_has_no_milestone(self, classic_debts, start):
        debts = classic_debts + [DebtAccount("done", "Done", 0, 10.0, 1000)]
        sim = compute_payoff_schedule(debts, avalanche(200), start)
        assert "done" not in {m.debt_id for m in sim.results.milestones}

    def test_huge_extra_pays_off_quickly(self, classic_debts, start):
        results = compute_payoff_schedule(classic_debts, avalanche(10000), start).results
        assert results.months_to_debt_free <= 3

    def test_single_debt(self, classic_debts, start):
        results = compute_payoff_schedule(classic_debts[:1], avalanche(100), start).results
        assert results.months_to_debt_free > 0
        assert results.total_interest_paid > 0

    def test_input_not_modified(self, classic_debts, start):
        before = list(classic_debts)
        compute_payoff_schedule(classic_debts, avalanche(200), start)
        assert classic_debts == before


# ── Calendar and options ──────────────────────────────────────────────────

class TestCalendar:

    def test_month_names(self, classic_debts, start):
        timeline = compute_payoff_schedule(classic_debts, avalanche(200), start).results.timeline
        assert timeline[0].month == 1
        assert timeline[0].month_name == "February 2025"
        assert timeline[11].month_name == "January 2026"

    def test_add_months(self):
        assert add_months(date(2025, 11, 20), 3) == date(2026, 2, 1)
        assert add_months(date(2025, 1, 31), 0) == date(2025, 1, 1)
        assert month_label(date(2024, 12, 1)) == "December 2024"

    def test_month_label_ignores_locale(self):
        original = locale.setlocale(locale.LC_TIME)
        try:
            locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
        except locale.Error:
            pytest.skip("de_DE locale not installed")
        try:
            assert month_label(date(2025, 3, 1)) == "March 2025"
        finally:
            locale.setlocale(locale.LC_TIME, original)

    @pytest.mark.parametrize("month, name", [(1, "January"), (5, "May"), (10, "October")])
    def test_month_label_names(self, month, name):
        assert month_label(date(2030, month, 15)) == f"{name} 2030"

    def test_debt_free_date(self, classic_debts, start):
        results = compute_payoff_schedule(classic_debts, avalanche(200), start).results
        assert results.debt_free_date == add_months(start, results.months_to_debt_free)

    def test_lump_sum_month(self, start):
        debts = [DebtAccount("loan", "Loan", 1000000, 12.0, 20000)]
        options = PayoffOptions(lump_sum=LumpSum(amount=100000, date=date(2025, 3, 15)))
        timeline = compute_payoff_schedule(debts, options, start).results.timeline
        assert timeline[0].extra_applied == 0
        assert timeline[1].month_name == "March 2025"
        assert timeline[1].extra_applied == 100000
        assert timeline[1].debts[0].payment == 120000
        assert timeline[2].extra_applied == 0


class TestFreedMinimums:

    @pytest.fixture
    def two_debts(self) -> list[DebtAccount]:
        return [
            DebtAccount("a", "Small", 10000, 0.0, 5000),
            DebtAccount("b", "Big", 1000000, 0.0, 10000),
        ]

    def test_redistributed_when_keeping_minimums(self, two_debts, start):
        timeline = compute_payoff_schedule(two_debts, avalanche(0), start).results.timeline
        assert timeline[1].snapshot_for("a").paid_off is True
        assert timeline[2].extra_applied == 5000
        assert timeline[2].snapshot_for("b").payment == 15000

    def test_dropped_without_keep_minimums(self, two_debts, start):
        options = avalanche(0, keep_minimums=False)
        timeline = compute_payoff_schedule(two_debts, options, start).results.timeline
        assert timeline[2].extra_applied == 0
        assert timeline[2].snapshot_for("b").payment == 10000

    def test_redistribution_finishes_sooner(self, two_debts, start):
        kept = compute_payoff_schedule(two_debts, avalanche(0), start).results
        dropped = compute_payoff_schedule(
            two_debts, avalanche(0, keep_minimums=False), start
        ).results
        assert kept.months_to_debt_free < dropped.months_to_debt_free
