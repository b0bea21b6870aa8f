from collections import OrderedDict
from collections.abc import Callable
from datetime import UTC, date, datetime

import structlog

from stocksage.usage.schemas import UsageStats

logger = structlog.get_logger()


def _utc_today() -> date:
    return datetime.now(UTC).date()


class UsageTracker:
    """Per-session usage counters held in process memory.

    Running out of credits is informational only; analyses are not blocked.
    ``analyses_today`` starts over on each UTC day while credits carry over.
    At most ``max_sessions`` sessions are kept; the least recently used one
    is dropped first.
    """

    def __init__(
        self,
        default_credits: int = 50,
        max_sessions: int = 10_000,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._default_credits = default_credits
        self._max_sessions = max_sessions
        self._today = today
        self._sessions: OrderedDict[str, tuple[date, UsageStats]] = OrderedDict()

    def get(self, session_id: str) -> UsageStats:
        entry = self._sessions.get(session_id)
        if entry is None:
            return self._initial()
        day, stats = entry
        if day != self._today():
            return stats.model_copy(update={"analyses_today": 0})
        return stats

    def record_analysis(self, session_id: str) -> UsageStats:
        stats = self.get(session_id).after_analysis()
        self._sessions[session_id] = (self._today(), stats)
        self._sessions.move_to_end(session_id)
        while len(self._sessions) > self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("usage_session_evicted", session_id=evicted)

        logger.info(
            "usage_analysis_recorded",
            session_id=session_id,
            credits_remaining=stats.credits_remaining,
            analyses_today=stats.analyses_today,
        )
        return stats

    def reset(self, session_id: str) -> UsageStats:
        self._sessions.pop(session_id, None)
        logger.info("usage_reset", session_id=session_id)
        return self._initial()

    def __len__(self) -> int:
        return len(self._sessions)

    def _initial(self) -> UsageStats:
        return UsageStats(credits_remaining=self._default_credits, analyses_today=0)
