"""Shared fixtures for the StockSage test suite."""

import json
from typing import Any

import pytest

from stocksage.advice.service import AnalysisService
from stocksage.llm.client import StructuredModelClient

from .stubs import StubChatModel


@pytest.fixture
def market_data() -> str:
    return json.dumps(
        {
            "generatedAt": "2024-07-01T09:15:00+00:00",
            "stocks": [
                {
                    "ticker": "RELIANCE",
                    "price": 2900.0,
                    "change": 0.0,
                    "change_percent": 0.0,
                    "volume": "5.1M",
                    "market_cap": "87.0T",
                },
                {
                    "ticker": "TCS",
                    "price": 3850.0,
                    "change": 12.5,
                    "change_percent": 0.33,
                    "volume": "2.4M",
                    "market_cap": "115.5T",
                },
            ],
        }
    )


@pytest.fixture
def request_payload(market_data) -> dict:
    # RELIANCE 29,000 + TCS 77,000 + cash 50,000 = 156,000 total value
    return {
        "portfolio": [
            {"ticker": "RELIANCE", "shares": 10},
            {"ticker": "TCS", "shares": 20},
        ],
        "marketData": market_data,
        "cash": 50000,
    }


@pytest.fixture
def make_advice():
    def _make(ticker: str, **overrides) -> dict:
        item = {
            "ticker": ticker,
            "recommendation": "hold",
            "reason": f"{ticker} is a steady long-term compounder.",
            "riskLevel": "medium",
            "percentage": 10.0,
        }
        item.update(overrides)
        return item

    return _make


@pytest.fixture
def valid_reply(make_advice) -> dict:
    return {
        "advice": [
            make_advice("RELIANCE", percentage=18.59),
            make_advice(
                "TCS",
                recommendation="sell",
                riskLevel="high",
                amount=25000,
                percentage=49.36,
                reason="TCS is almost half of your portfolio; trim it to spread risk.",
            ),
        ]
    }


@pytest.fixture
def make_service():
    def _make(reply: Any = None, error: Exception | None = None, **kwargs):
        stub = StubChatModel(reply=reply, error=error)
        service = AnalysisService(
            StructuredModelClient(stub, timeout=5),
            concentration_threshold_pct=kwargs.pop("concentration_threshold_pct", 30.0),
            allocation_tolerance_pct=kwargs.pop("allocation_tolerance_pct", 1.0),
            strict_concentration=kwargs.pop("strict_concentration", False),
            **kwargs,
        )
        return service, stub

    return _make
