"""Tests for avalanche vs snowball comparison and the 3% recommendation rule."""

import pytest

from debtpayoff.engine.errors import InvalidOptions
from debtpayoff.engine.financial_model import DebtAccount
from debtpayoff.engine.scenario_sampler import ScenarioSampler
from debtpayoff.evaluation.comparison import compare_strategies, describe_strategies, recommend


class TestRecommendationRule:

    def test_above_threshold(self):
        assert recommend(4, 100) == "avalanche"

    def test_exactly_three_percent_is_not_enough(self):
        assert recommend(3, 100) == "snowball"

    def test_snowball_cheaper(self):
        assert recommend(-50, 1000) == "snowball"

    def test_zero_avalanche_interest(self):
        assert recommend(1, 0) == "avalanche"
        assert recommend(0, 0) == "snowball"


class TestCompareStrategies:

    def test_similar_aprs_recommend_snowball(self, start):
        comparison = compare_strategies(ScenarioSampler.preset("similar_aprs"), 10000, start)
        assert comparison.recommendation == "snowball"

    def test_apr_spread_recommends_avalanche(self, start):
        comparison = compare_strategies(ScenarioSampler.preset("apr_spread"), 20000, start)
        assert comparison.recommendation == "avalanche"
        assert comparison.savings.interest > 0

    def test_savings_are_snowball_minus_avalanche(self, classic_debts, start):
        comparison = compare_strategies(classic_debts, 20000, start)
        assert comparison.savings.interest == (
            comparison.snowball.total_interest - comparison.avalanche.total_interest
        )
        assert comparison.savings.months == (
            comparison.snowball.total_months - comparison.avalanche.total_months
        )

    def test_identical_orders_tie(self, classic_debts, start):
        """Highest APR is also the smallest balance here, so both runs match."""
        comparison = compare_strategies(classic_debts, 20000, start)
        assert comparison.savings.interest == 0
        assert comparison.savings.months == 0
        assert comparison.recommendation == "snowball"

    def test_avalanche_never_costs_more(self, start):
        debts = [
            DebtAccount("a", "Small Low", 150000, 6.0, 5000),
            DebtAccount("b", "Big High", 600000, 24.0, 15000),
            DebtAccount("c", "Mid", 300000, 15.0, 9000),
        ]
        comparison = compare_strategies(debts, 25000, start)
        assert comparison.avalanche.total_interest <= comparison.snowball.total_interest

    def test_runs_are_labelled(self, classic_debts, start):
        comparison = compare_strategies(classic_debts, 10000, start)
        assert comparison.avalanche.simulation.method == "avalanche"
        assert comparison.snowball.simulation.method == "snowball"
        assert comparison.avalanche.simulation.options.keep_minimums is True

    def test_empty(self):
        with pytest.raises(InvalidOptions):
            compare_strategies([], 10000)


class TestDescribeStrategies:

    def test_empty(self):
        text = describe_strategies([])
        assert "Add your debts" in text["avalanche"]
        assert "Add your debts" in text["comparison"]

    def test_names_targets(self, classic_debts):
        text = describe_strategies(classic_debts)
        assert "Credit Card 2" in text["avalanche"]
        assert "22% APR" in text["avalanche"]
        assert "Credit Card 2" in text["snowball"]
        assert "$2,000.00" in text["snowball"]
        assert text["comparison"].startswith("Adding $100.00/month extra")
