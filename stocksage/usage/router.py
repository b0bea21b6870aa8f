from fastapi import APIRouter

from stocksage.dependencies import SessionId, UsageTrackerDep
from stocksage.usage.schemas import UsageStats

router = APIRouter()


@router.get("", response_model=UsageStats)
async def get_usage(tracker: UsageTrackerDep, session_id: SessionId) -> UsageStats:
    return tracker.get(session_id)


@router.delete("", response_model=UsageStats)
async def reset_usage(tracker: UsageTrackerDep, session_id: SessionId) -> UsageStats:
    return tracker.reset(session_id)
