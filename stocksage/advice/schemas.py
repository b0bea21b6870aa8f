"""Advice contract schemas.

Request models shape what is sent to the model; response models constrain
what the model is allowed to send back. Wire names are camelCase.
"""

from __future__ import annotations

from collections import Counter
from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)

MAX_TICKER_LENGTH = 10

Ticker = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        to_upper=True,
        min_length=1,
        max_length=MAX_TICKER_LENGTH,
    ),
]


class Recommendation(StrEnum):
    buy = "buy"
    sell = "sell"
    hold = "hold"
    diversify = "diversify"


class RiskLevel(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"


# Recommendations that move money and therefore need an amount.
TRANSACTIONAL = frozenset({Recommendation.buy, Recommendation.sell})


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class Holding(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: Ticker
    shares: float = Field(gt=0, allow_inf_nan=False)


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    portfolio: list[Holding] = Field(min_length=1)
    market_data: str = Field(alias="marketData")
    cash: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("portfolio")
    @classmethod
    def check_unique_tickers(cls, portfolio: list[Holding]) -> list[Holding]:
        counts = Counter(h.ticker for h in portfolio)
        duplicates = sorted(t for t, n in counts.items() if n > 1)
        if duplicates:
            raise ValueError(f"duplicate tickers in portfolio: {', '.join(duplicates)}")
        return portfolio

    @property
    def tickers(self) -> list[str]:
        return [h.ticker for h in self.portfolio]


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class AdviceItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ticker: Ticker = Field(description="The ticker symbol of the stock.")
    recommendation: Recommendation = Field(description="Recommended action for the stock.")
    reason: str = Field(min_length=1, description="Reasoning behind the recommendation.")
    risk_level: RiskLevel = Field(
        alias="riskLevel",
        description="The estimated risk level of the stock (low, medium, or high).",
    )
    amount: float | None = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="The amount in rupees to buy or sell.",
    )
    percentage: float = Field(
        ge=0,
        le=100,
        allow_inf_nan=False,
        description=(
            "The percentage of the total portfolio value (including cash) "
            "this stock represents."
        ),
    )

    @field_validator("recommendation", "risk_level", mode="before")
    @classmethod
    def lowercase_enums(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("reason")
    @classmethod
    def reason_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("reason must not be blank")
        return value

    @model_validator(mode="after")
    def require_amount_for_trades(self) -> AdviceItem:
        if self.recommendation in TRANSACTIONAL and self.amount is None:
            raise ValueError(f"amount is required for '{self.recommendation}' recommendations")
        return self


class AdviceResponse(BaseModel):
    """The structure the model must return."""

    advice: list[AdviceItem] = Field(
        min_length=1,
        description="Investment advice for each stock in the portfolio.",
    )


class PolicyWarning(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rule_id: str = Field(alias="ruleId")
    name: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    advice: list[AdviceItem]
    generated_at: str = Field(alias="generatedAt")
    warnings: list[PolicyWarning] = Field(default_factory=list)
