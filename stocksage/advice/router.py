"""Portfolio analysis endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from stocksage.advice.schemas import AnalysisResult
from stocksage.advice.summary import RebalanceSummary, build_rebalance_summary
from stocksage.dependencies import AnalysisServiceDep, SessionId, UsageTrackerDep

router = APIRouter()

# Bodies are taken as raw JSON so that shape errors are reported by the
# analysis service as a single INVALID_REQUEST with every violation listed.
RawBody = Annotated[Any, Body()]


@router.post("", response_model=AnalysisResult)
async def analyze_portfolio(
    payload: RawBody,
    service: AnalysisServiceDep,
    tracker: UsageTrackerDep,
    session_id: SessionId,
) -> AnalysisResult:
    """Analyze a portfolio against caller-supplied market data."""
    result = await service.analyze(payload)
    tracker.record_analysis(session_id)
    return result


@router.post("/live", response_model=AnalysisResult)
async def analyze_portfolio_live(
    payload: RawBody,
    service: AnalysisServiceDep,
    tracker: UsageTrackerDep,
    session_id: SessionId,
) -> AnalysisResult:
    """Analyze a portfolio against a freshly simulated market snapshot."""
    result = await service.analyze_live(payload)
    tracker.record_analysis(session_id)
    return result


@router.post("/summary", response_model=RebalanceSummary)
async def summarize(result: AnalysisResult) -> RebalanceSummary:
    return build_rebalance_summary(result)
