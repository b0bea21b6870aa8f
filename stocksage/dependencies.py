from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from stocksage.advice.service import AnalysisService
from stocksage.config import settings
from stocksage.market.providers.simulated import SimulatedMarketProvider
from stocksage.market.service import MarketService
from stocksage.usage.service import UsageTracker

ANONYMOUS_SESSION = "anonymous"


def get_session_id(
    x_session_id: Annotated[str | None, Header(max_length=128)] = None,
) -> str:
    return x_session_id or ANONYMOUS_SESSION


SessionId = Annotated[str, Depends(get_session_id)]


def get_market_service() -> MarketService:
    return MarketService(SimulatedMarketProvider())


MarketServiceDep = Annotated[MarketService, Depends(get_market_service)]


def get_analysis_service() -> AnalysisService:
    from stocksage.llm.factory import LLMFactory

    return AnalysisService(LLMFactory.create_client(), market_service=get_market_service())


AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]


@lru_cache
def get_usage_tracker() -> UsageTracker:
    return UsageTracker(
        default_credits=settings.default_credits,
        max_sessions=settings.usage_max_sessions,
    )


UsageTrackerDep = Annotated[UsageTracker, Depends(get_usage_tracker)]
