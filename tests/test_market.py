import json
import random
import re

import pytest

from stocksage.market.providers.simulated import BASE_PRICES, SimulatedMarketProvider
from stocksage.market.service import MarketService


@pytest.fixture
def provider() -> SimulatedMarketProvider:
    return SimulatedMarketProvider(rng=random.Random(42))


@pytest.mark.asyncio
async def test_snapshot_covers_every_ticker(provider):
    snapshot = await provider.get_snapshot()
    assert [q.ticker for q in snapshot.stocks] == list(BASE_PRICES)


@pytest.mark.asyncio
async def test_quotes_stay_within_five_percent(provider):
    snapshot = await provider.get_snapshot()
    for quote in snapshot.stocks:
        base = BASE_PRICES[quote.ticker]
        assert abs(quote.change_percent) <= 5.0
        assert quote.price == pytest.approx(base + quote.change, abs=0.011)
        assert re.fullmatch(r"\d+\.\dM", quote.volume)
        assert re.fullmatch(r"\d+\.\dT", quote.market_cap)


@pytest.mark.asyncio
async def test_seeded_snapshots_are_reproducible():
    first = await SimulatedMarketProvider(rng=random.Random(7)).get_snapshot()
    second = await SimulatedMarketProvider(rng=random.Random(7)).get_snapshot()
    assert first.stocks == second.stocks


@pytest.mark.asyncio
async def test_snapshot_json_shape(provider):
    payload = json.loads(await MarketService(provider).get_snapshot_json())

    assert set(payload) == {"generatedAt", "stocks"}
    assert set(payload["stocks"][0]) == {
        "ticker",
        "price",
        "change",
        "change_percent",
        "volume",
        "market_cap",
    }


@pytest.mark.asyncio
async def test_snapshot_is_regenerated_per_call():
    class CountingProvider(SimulatedMarketProvider):
        calls = 0

        async def get_snapshot(self):
            CountingProvider.calls += 1
            return await super().get_snapshot()

    service = MarketService(CountingProvider(rng=random.Random(1)))
    await service.get_snapshot_json()
    await service.get_snapshot_json()
    assert CountingProvider.calls == 2


def test_list_tickers(provider):
    assert MarketService(provider).list_tickers()[:3] == ["TCS", "INFY", "RELIANCE"]
