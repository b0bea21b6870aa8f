from abc import ABC, abstractmethod

from stocksage.market.schemas import MarketSnapshot


class MarketDataProvider(ABC):
    @abstractmethod
    async def get_snapshot(self) -> MarketSnapshot: ...

    @abstractmethod
    def list_tickers(self) -> list[str]: ...
