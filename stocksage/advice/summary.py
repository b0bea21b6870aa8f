"""Read-only rollups and display mappings over validated advice."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from stocksage.advice.schemas import AdviceItem, AnalysisResult, Recommendation, RiskLevel

_INVEST = frozenset({Recommendation.buy, Recommendation.diversify})
_DIVEST = frozenset({Recommendation.sell})


@dataclass(frozen=True)
class DisplayInfo:
    label: str
    tone: str  # "positive", "negative", "neutral", "info", "caution"


RECOMMENDATION_DISPLAY: dict[str, DisplayInfo] = {
    Recommendation.buy: DisplayInfo("Buy", "positive"),
    Recommendation.sell: DisplayInfo("Sell", "negative"),
    Recommendation.hold: DisplayInfo("Hold", "neutral"),
    Recommendation.diversify: DisplayInfo("Diversify", "info"),
}

RISK_DISPLAY: dict[str, DisplayInfo] = {
    RiskLevel.low: DisplayInfo("Low Risk", "positive"),
    RiskLevel.medium: DisplayInfo("Medium Risk", "caution"),
    RiskLevel.high: DisplayInfo("High Risk", "negative"),
}


def _sum_amounts(advice: Iterable[AdviceItem], recommendations: frozenset) -> float:
    return math.fsum(
        item.amount
        for item in advice
        if item.recommendation in recommendations and item.amount is not None
    )


def total_to_invest(advice: Iterable[AdviceItem]) -> float:
    return _sum_amounts(advice, _INVEST)


def total_to_divest(advice: Iterable[AdviceItem]) -> float:
    return _sum_amounts(advice, _DIVEST)


def recommendation_display(value: str) -> DisplayInfo:
    """Unknown values (model drift) fall back to the hold display."""
    return RECOMMENDATION_DISPLAY.get(value, RECOMMENDATION_DISPLAY[Recommendation.hold])


def risk_display(value: str) -> DisplayInfo:
    """Unknown values fall back to the medium-risk display."""
    return RISK_DISPLAY.get(value, RISK_DISPLAY[RiskLevel.medium])


def format_rupees(amount: float, decimals: int | None = None) -> str:
    """Format an amount with Indian digit grouping, e.g. ₹12,34,567.

    Without ``decimals`` up to three fraction digits are kept and trailing
    zeros dropped (₹1,000.5); with it the fraction is fixed-width.
    """
    if decimals is None:
        text = f"{abs(amount):.3f}".rstrip("0").rstrip(".")
    else:
        text = f"{abs(amount):.{decimals}f}"
    sign = "-" if amount < 0 and text.strip("0.") else ""
    whole, _, fraction = text.partition(".")

    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join([*groups, tail])

    return f"{sign}₹{grouped}" + (f".{fraction}" if fraction else "")


class AdviceDisplay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ticker: str
    recommendation_label: str = Field(alias="recommendationLabel")
    recommendation_tone: str = Field(alias="recommendationTone")
    risk_label: str = Field(alias="riskLabel")
    risk_tone: str = Field(alias="riskTone")
    percentage_label: str | None = Field(default=None, alias="percentageLabel")
    action_label: str | None = Field(default=None, alias="actionLabel")
    amount_label: str | None = Field(default=None, alias="amountLabel")


class RebalanceSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_to_invest: float = Field(alias="totalToInvest")
    total_to_divest: float = Field(alias="totalToDivest")
    total_to_invest_label: str = Field(alias="totalToInvestLabel")
    total_to_divest_label: str = Field(alias="totalToDivestLabel")
    items: list[AdviceDisplay]


def _display_item(item: AdviceItem) -> AdviceDisplay:
    rec = recommendation_display(item.recommendation)
    risk = risk_display(item.risk_level)

    action_label = amount_label = None
    if item.amount is not None and item.recommendation in (Recommendation.buy, Recommendation.sell):
        action_label = "Invest" if item.recommendation == Recommendation.buy else "Sell"
        amount_label = format_rupees(item.amount)

    return AdviceDisplay(
        ticker=item.ticker,
        recommendation_label=rec.label,
        recommendation_tone=rec.tone,
        risk_label=risk.label,
        risk_tone=risk.tone,
        percentage_label=f"{item.percentage:.2f}% of portfolio",
        action_label=action_label,
        amount_label=amount_label,
    )


def build_rebalance_summary(result: AnalysisResult) -> RebalanceSummary:
    invest = total_to_invest(result.advice)
    divest = total_to_divest(result.advice)
    return RebalanceSummary(
        total_to_invest=invest,
        total_to_divest=divest,
        total_to_invest_label=format_rupees(invest),
        total_to_divest_label=format_rupees(divest),
        items=[_display_item(item) for item in result.advice],
    )
