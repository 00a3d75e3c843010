import asyncio

import pytest

from sentix.credentials import CredentialResolver, StaticSource
from sentix.sentiment.schemas import MarketAnalysis

VALID_KEY = "AIza" + "A1b2C3d4E5f6G7h8I9j0K1l2M3n4O5p6Q7r"


def make_stock(symbol: str, score: int, **overrides) -> dict:
    stock = {
        "symbol": symbol,
        "name": f"{symbol} Inc.",
        "currentScore": score,
        "change24h": 3.5,
        "change90d": 12,
        "rankChange": 4,
        "volume": 15400,
        "description": f"Chatter around {symbol}",
        "history": [score - 10 + (i % 5) for i in range(90)],
        "sources": [
            {"title": "Headline", "url": "https://www.reuters.com/markets/x", "domain": "reuters.com"},
            {"title": "Thread", "url": "https://reddit.com/r/stocks/1", "domain": "reddit.com"},
        ],
        "platformBreakdown": {"twitter": score, "reddit": score - 5, "news": score + 5},
    }
    stock.update(overrides)
    return stock


def make_payload(positive=("NVDA", "AAPL", "MSFT"), negative=("TSLA", "INTC")) -> dict:
    return {
        "timestamp": "2026-10-19T09:30:00Z",
        "topPositive": [make_stock(s, 87 - i * 5) for i, s in enumerate(positive)],
        "topNegative": [make_stock(s, -70 + i * 5) for i, s in enumerate(negative)],
    }


class FakeSentimentClient:
    """Stands in for SentimentClient; hands out queued results in order."""

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def fetch_analysis(self, credential: str) -> MarketAnalysis:
        self.calls.append(credential)
        if self.gate is not None:
            await self.gate.wait()
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def analysis(payload) -> MarketAnalysis:
    return MarketAnalysis.model_validate(payload)


@pytest.fixture
def resolver() -> CredentialResolver:
    return CredentialResolver([StaticSource("test", VALID_KEY)])
