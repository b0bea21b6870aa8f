import random
from datetime import UTC, datetime

import structlog

from stocksage.market.providers.base import MarketDataProvider
from stocksage.market.schemas import MarketSnapshot, StockQuote

logger = structlog.get_logger()

# NSE large caps with their reference prices in rupees.
BASE_PRICES: dict[str, float] = {
    "TCS": 3850.50,
    "INFY": 1650.75,
    "RELIANCE": 2900.00,
    "HDFCBANK": 1500.25,
    "ICICIBANK": 1100.80,
    "BHARTIARTL": 1400.10,
    "SBIN": 830.55,
    "WIPRO": 480.90,
    "ITC": 430.20,
    "LT": 3600.00,
}

MAX_FLUCTUATION = 0.05


class SimulatedMarketProvider(MarketDataProvider):
    """Random-walk quotes around fixed base prices.

    Every call draws a fresh snapshot; nothing is cached between calls.
    """

    def __init__(
        self,
        base_prices: dict[str, float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._base_prices = dict(base_prices or BASE_PRICES)
        self._rng = rng or random.Random()

    async def get_snapshot(self) -> MarketSnapshot:
        stocks = [
            self._quote(ticker, base_price)
            for ticker, base_price in self._base_prices.items()
        ]
        logger.debug("market_snapshot_generated", stocks=len(stocks))
        return MarketSnapshot(generated_at=datetime.now(UTC).isoformat(), stocks=stocks)

    def list_tickers(self) -> list[str]:
        return list(self._base_prices)

    def _quote(self, ticker: str, base_price: float) -> StockQuote:
        fluctuation = (self._rng.random() - 0.5) * 2 * MAX_FLUCTUATION
        current = base_price * (1 + fluctuation)
        change = current - base_price

        return StockQuote(
            ticker=ticker,
            price=round(current, 2),
            change=round(change, 2),
            change_percent=round(change / base_price * 100, 2),
            volume=f"{self._rng.random() * 10:.1f}M",
            market_cap=f"{base_price / 100 * (self._rng.random() * 5 + 1):.1f}T",
        )
