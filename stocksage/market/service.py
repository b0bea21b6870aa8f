import structlog

from stocksage.market.providers.base import MarketDataProvider
from stocksage.market.schemas import MarketSnapshot

logger = structlog.get_logger()


class MarketService:
    def __init__(self, provider: MarketDataProvider) -> None:
        self._provider = provider

    async def get_snapshot(self) -> MarketSnapshot:
        snapshot = await self._provider.get_snapshot()
        logger.info("market_get_snapshot", stocks=len(snapshot.stocks))
        return snapshot

    async def get_snapshot_json(self) -> str:
        """Return a freshly generated snapshot serialized the way the analysis flow expects."""
        snapshot = await self.get_snapshot()
        return snapshot.model_dump_json(by_alias=True, indent=2)

    def list_tickers(self) -> list[str]:
        return self._provider.list_tickers()
