import itertools

import pytest

from stocksage.advice.schemas import AdviceItem, AnalysisResult
from stocksage.advice.summary import (
    build_rebalance_summary,
    format_rupees,
    recommendation_display,
    risk_display,
    total_to_divest,
    total_to_invest,
)


@pytest.fixture
def mixed_advice(make_advice) -> list[AdviceItem]:
    return [
        AdviceItem.model_validate(raw)
        for raw in (
            make_advice("INFY", recommendation="buy", amount=1000),
            make_advice("TCS", recommendation="sell", amount=500, riskLevel="high"),
            make_advice("ITC", recommendation="hold"),
        )
    ]


class TestTotals:
    def test_invest_and_divest(self, mixed_advice):
        assert total_to_invest(mixed_advice) == 1000
        assert total_to_divest(mixed_advice) == 500

    def test_diversify_counts_towards_invest(self, make_advice):
        advice = [
            AdviceItem.model_validate(make_advice("LT", recommendation="diversify", amount=750)),
            AdviceItem.model_validate(make_advice("SBIN", recommendation="diversify")),
        ]
        assert total_to_invest(advice) == 750
        assert total_to_divest(advice) == 0

    def test_empty_advice(self):
        assert total_to_invest([]) == 0
        assert total_to_divest([]) == 0

    def test_order_does_not_matter(self, make_advice):
        advice = [
            AdviceItem.model_validate(make_advice("INFY", recommendation="buy", amount=0.1)),
            AdviceItem.model_validate(make_advice("LT", recommendation="buy", amount=0.2)),
            AdviceItem.model_validate(make_advice("SBIN", recommendation="buy", amount=0.3)),
            AdviceItem.model_validate(make_advice("TCS", recommendation="sell", amount=1e6)),
            AdviceItem.model_validate(make_advice("ITC", recommendation="sell", amount=1e-6)),
        ]
        invest = {total_to_invest(p) for p in itertools.permutations(advice)}
        divest = {total_to_divest(p) for p in itertools.permutations(advice)}
        assert len(invest) == 1
        assert len(divest) == 1


class TestDisplay:
    @pytest.mark.parametrize(
        ("value", "label"),
        [("buy", "Buy"), ("sell", "Sell"), ("hold", "Hold"), ("diversify", "Diversify")],
    )
    def test_recommendation_labels(self, value, label):
        assert recommendation_display(value).label == label

    def test_unknown_recommendation_falls_back_to_hold(self):
        assert recommendation_display("strong_buy") == recommendation_display("hold")

    @pytest.mark.parametrize(
        ("value", "label"),
        [("low", "Low Risk"), ("medium", "Medium Risk"), ("high", "High Risk")],
    )
    def test_risk_labels(self, value, label):
        assert risk_display(value).label == label

    def test_unknown_risk_falls_back_to_medium(self):
        assert risk_display("extreme") == risk_display("medium")


class TestFormatRupees:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, "₹0"),
            (500, "₹500"),
            (1000, "₹1,000"),
            (50000, "₹50,000"),
            (123456, "₹1,23,456"),
            (12345678, "₹1,23,45,678"),
            (-2500, "-₹2,500"),
        ],
    )
    def test_indian_grouping(self, amount, expected):
        assert format_rupees(amount) == expected

    def test_decimals(self):
        assert format_rupees(1234.5, decimals=2) == "₹1,234.50"

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (1000.5, "₹1,000.5"),
            (123456.789, "₹1,23,456.789"),
            (2500.25, "₹2,500.25"),
            (99.9999, "₹100"),
            (-0.0001, "₹0"),
        ],
    )
    def test_fraction_kept_when_non_zero(self, amount, expected):
        assert format_rupees(amount) == expected


def test_rebalance_summary(mixed_advice):
    result = AnalysisResult(advice=mixed_advice, generated_at="2024-07-01T10:00:00+00:00")

    summary = build_rebalance_summary(result)

    assert summary.total_to_invest == 1000
    assert summary.total_to_divest == 500
    assert summary.total_to_invest_label == "₹1,000"
    buy, sell, hold = summary.items
    assert (buy.action_label, buy.amount_label) == ("Invest", "₹1,000")
    assert (sell.action_label, sell.risk_label) == ("Sell", "High Risk")
    assert hold.action_label is None
    assert hold.percentage_label == "10.00% of portfolio"
