"""Prompt and response schema for the market sentiment scan."""

MARKET_SENTIMENT_PROMPT = """You are a real-time financial sentiment analysis engine.

Step 1: Use Google Search to scan the last 7 days of data for S&P 500 and Nasdaq 100 stocks.
Step 2: Specifically look for discussions on:
   - Twitter/X ($CASHTAGS)
   - Reddit (r/wallstreetbets, r/stocks, r/investing)
   - Mainstream Financial News (Bloomberg, CNBC, Reuters)

Step 3: Identify the top 10 stocks with the most significant POSITIVE sentiment shifts \
and the top 10 with NEGATIVE sentiment shifts.

For each stock found:
- Determine a composite sentiment score (-100 to 100).
- Estimate separate sentiment scores for Twitter, Reddit, and News based on the tone \
of those specific search results.
- Estimate volume of discussion (low/med/high converted to a number 500-50000).
- Provide a short explanation (description).
- Include 2-3 specific "sources" (URLs) that justify this sentiment.
- Generate a "history" array of 90 numbers representing the trend, oldest first.

Rank Change Logic:
- If the stock is breaking news today, rank change is high (+10 to +50).
- If it's a lingering story, rank change is low (+/- 1-5).

Order topPositive from most to least positive and topNegative from most to least negative.
Return ONLY the JSON document."""

_STOCK_REQUIRED = [
    "symbol",
    "name",
    "currentScore",
    "change24h",
    "change90d",
    "rankChange",
    "volume",
    "description",
    "history",
    "sources",
    "platformBreakdown",
]

_STOCK_SCHEMA = {
    "type": "object",
    "properties": {
        "symbol": {"type": "string"},
        "name": {"type": "string"},
        "currentScore": {"type": "number"},
        "change24h": {"type": "number"},
        "change90d": {"type": "number"},
        "rankChange": {"type": "integer"},
        "volume": {"type": "integer"},
        "description": {"type": "string"},
        "platformBreakdown": {
            "type": "object",
            "properties": {
                "twitter": {"type": "number"},
                "reddit": {"type": "number"},
                "news": {"type": "number"},
            },
            "required": ["twitter", "reddit", "news"],
        },
        "sources": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "url": {"type": "string"},
                    "domain": {"type": "string"},
                },
                "required": ["title", "url", "domain"],
            },
        },
        "history": {"type": "array", "items": {"type": "number"}},
    },
    "required": _STOCK_REQUIRED,
}

MARKET_ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "timestamp": {"type": "string"},
        "topPositive": {"type": "array", "items": _STOCK_SCHEMA},
        "topNegative": {"type": "array", "items": _STOCK_SCHEMA},
    },
    "required": ["topPositive", "topNegative", "timestamp"],
}
