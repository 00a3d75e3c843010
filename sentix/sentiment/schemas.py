import math
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_LIST_SIZE = 10
MAX_HISTORY_POINTS = 90
MAX_SOURCES = 3
SCORE_MIN = -100
SCORE_MAX = 100
_LINK_SCHEMES = ("http", "https")


def _as_int(value: object) -> object:
    """Round numeric input to int; anything else is left for pydantic to reject."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return value
    if not math.isfinite(value):
        raise ValueError("value must be a finite number")
    return round(value)


def _clamp_score(value: object) -> object:
    value = _as_int(value)
    if isinstance(value, int):
        return max(SCORE_MIN, min(SCORE_MAX, value))
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Source(_CamelModel):
    title: str
    url: str
    domain: str

    @field_validator("url")
    @classmethod
    def web_links_only(cls, v: str) -> str:
        # Links are rendered as anchors; anything but http(s) is dropped.
        v = v.strip()
        return v if urlparse(v).scheme.lower() in _LINK_SCHEMES else ""


class PlatformSentiment(_CamelModel):
    twitter: int  # -100 to 100
    reddit: int
    news: int

    @field_validator("twitter", "reddit", "news", mode="before")
    @classmethod
    def _clamp(cls, value: object) -> object:
        return _clamp_score(value)


class StockSentiment(_CamelModel):
    symbol: str
    name: str
    current_score: int  # -100 to 100
    change_24h: float = Field(alias="change24h")
    change_90d: float = Field(alias="change90d")
    rank_change: int  # positions moved in ranking
    volume: int  # discussion count
    description: str
    history: list[int]  # oldest to newest
    sources: list[Source]
    platform_breakdown: PlatformSentiment

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("current_score", mode="before")
    @classmethod
    def _clamp_current(cls, value: object) -> object:
        return _clamp_score(value)

    @field_validator("rank_change", mode="before")
    @classmethod
    def _round_rank(cls, value: object) -> object:
        return _as_int(value)

    @field_validator("volume", mode="before")
    @classmethod
    def _non_negative_volume(cls, value: object) -> object:
        value = _as_int(value)
        return max(0, value) if isinstance(value, int) else value

    @field_validator("history", mode="before")
    @classmethod
    def _recent_history(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return [_clamp_score(point) for point in value[-MAX_HISTORY_POINTS:]]

    @field_validator("sources", mode="before")
    @classmethod
    def _limit_sources(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return value[:MAX_SOURCES]


class MarketAnalysis(_CamelModel):
    top_positive: list[StockSentiment]
    top_negative: list[StockSentiment]
    timestamp: str

    @field_validator("top_positive", "top_negative", mode="before")
    @classmethod
    def _limit_list(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return value[:MAX_LIST_SIZE]

    @field_validator("top_positive", "top_negative")
    @classmethod
    def _drop_duplicate_symbols(cls, stocks: list[StockSentiment]) -> list[StockSentiment]:
        seen: set[str] = set()
        unique = []
        for stock in stocks:
            if stock.symbol in seen:
                continue
            seen.add(stock.symbol)
            unique.append(stock)
        return unique

    def find(self, symbol: str) -> StockSentiment | None:
        symbol = symbol.strip().upper()
        for stock in (*self.top_positive, *self.top_negative):
            if stock.symbol == symbol:
                return stock
        return None
