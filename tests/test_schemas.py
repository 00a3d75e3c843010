import pytest
from pydantic import ValidationError

from conftest import make_payload, make_stock
from sentix.sentiment.schemas import MarketAnalysis, StockSentiment


class TestStockSentiment:
    def test_camel_case_payload(self) -> None:
        stock = StockSentiment.model_validate(make_stock("nvda", 87))
        assert stock.symbol == "NVDA"
        assert stock.current_score == 87
        assert stock.change_24h == 3.5
        assert stock.platform_breakdown.news == 92

    def test_dumps_back_to_wire_names(self) -> None:
        dumped = StockSentiment.model_validate(make_stock("NVDA", 87)).model_dump(by_alias=True)
        assert {"currentScore", "change24h", "change90d", "rankChange", "platformBreakdown"} <= set(dumped)

    def test_scores_are_rounded_and_clamped(self) -> None:
        stock = StockSentiment.model_validate(
            make_stock("NVDA", 140.6, history=[-150, 12.4, 99.6], rankChange=3.2, volume=-5)
        )
        assert stock.current_score == 100
        assert stock.history == [-100, 12, 100]
        assert stock.rank_change == 3
        assert stock.volume == 0
        assert stock.platform_breakdown.twitter == 100

    def test_long_history_keeps_most_recent_points(self) -> None:
        history = list(range(-60, 60))
        stock = StockSentiment.model_validate(make_stock("NVDA", 50, history=history))
        assert len(stock.history) == 90
        assert stock.history[-1] == 59
        assert stock.history[0] == -30

    def test_short_history_is_accepted(self) -> None:
        stock = StockSentiment.model_validate(make_stock("NVDA", 50, history=[1, 2, 3]))
        assert stock.history == [1, 2, 3]

    def test_extra_sources_are_truncated(self) -> None:
        source = {"title": "t", "url": "https://cnbc.com/a", "domain": "cnbc.com"}
        stock = StockSentiment.model_validate(make_stock("NVDA", 50, sources=[source] * 5))
        assert len(stock.sources) == 3

    def test_non_numeric_score_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StockSentiment.model_validate(make_stock("NVDA", 50, currentScore="very bullish"))


class TestMarketAnalysis:
    def test_lists_longer_than_ten_are_truncated(self) -> None:
        symbols = tuple(f"S{i}" for i in range(14))
        analysis = MarketAnalysis.model_validate(make_payload(positive=symbols))
        assert len(analysis.top_positive) == 10
        assert analysis.top_positive[-1].symbol == "S9"

    def test_duplicate_symbols_keep_first(self) -> None:
        analysis = MarketAnalysis.model_validate(make_payload(positive=("NVDA", "AMD", "NVDA")))
        assert [s.symbol for s in analysis.top_positive] == ["NVDA", "AMD"]
        assert analysis.top_positive[0].current_score == 87

    def test_find_searches_both_lists(self, analysis: MarketAnalysis) -> None:
        assert analysis.find("tsla").symbol == "TSLA"
        assert analysis.find("NVDA").symbol == "NVDA"
        assert analysis.find("GME") is None

    def test_empty_lists_are_valid(self) -> None:
        analysis = MarketAnalysis.model_validate(make_payload(positive=(), negative=()))
        assert analysis.top_positive == []
