import json
import re
from collections.abc import Callable

import structlog
from langchain_core.messages import BaseMessage, HumanMessage
from pydantic import ValidationError

from sentix.exceptions import EmptyResponseError, SchemaViolationError, TransportError
from sentix.llm.factory import ChatRunnable, LLMFactory
from sentix.sentiment.prompts import MARKET_ANALYSIS_SCHEMA, MARKET_SENTIMENT_PROMPT
from sentix.sentiment.schemas import MarketAnalysis

logger = structlog.get_logger()

ModelBuilder = Callable[[str], ChatRunnable]

_REQUIRED_KEYS = ("topPositive", "topNegative", "timestamp")
_OPENING_FENCE = re.compile(r"^```[\w-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")
_AUTH_STATUSES = (400, 401, 403)


def _default_model_builder(api_key: str) -> ChatRunnable:
    return LLMFactory.create(api_key, response_schema=MARKET_ANALYSIS_SCHEMA)


def strip_code_fence(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence, if present."""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def message_text(message: BaseMessage) -> str:
    """Text of a chat reply; grounded replies may arrive as a list of parts."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)


def status_code_of(exc: BaseException) -> int | None:
    """Find an HTTP status on a provider exception or anything it wraps."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for candidate in (
            getattr(current, "status_code", None),
            getattr(current, "code", None),
            getattr(getattr(current, "response", None), "status_code", None),
        ):
            if isinstance(candidate, int) and 100 <= candidate < 600:
                return int(candidate)
        current = current.__cause__ or current.__context__
    return None


def parse_analysis(text: str | None) -> MarketAnalysis:
    if not text or not text.strip():
        raise EmptyResponseError()

    payload = strip_code_fence(text)
    if not payload:
        raise EmptyResponseError()

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise SchemaViolationError(f"Model returned malformed JSON: {exc}", raw_error=exc) from exc

    if not isinstance(data, dict):
        raise SchemaViolationError(
            f"Expected a JSON object, got {type(data).__name__}",
            raw_error=TypeError(type(data).__name__),
        )

    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        exc = KeyError(", ".join(missing))
        raise SchemaViolationError(f"Response is missing required keys: {missing}", raw_error=exc)

    try:
        return MarketAnalysis.model_validate(data)
    except ValidationError as exc:
        raise SchemaViolationError(
            f"Response does not match the analysis schema ({exc.error_count()} errors)",
            raw_error=exc,
        ) from exc


class SentimentClient:
    def __init__(self, model_builder: ModelBuilder = _default_model_builder) -> None:
        self._build_model = model_builder

    async def fetch_analysis(self, credential: str) -> MarketAnalysis:
        llm = self._build_model(credential)
        logger.info("sentiment_fetch_started")

        try:
            response = await llm.ainvoke([HumanMessage(content=MARKET_SENTIMENT_PROMPT)])
        except Exception as exc:
            status = status_code_of(exc)
            logger.error("sentiment_fetch_failed", status_code=status, error=type(exc).__name__)
            if status in _AUTH_STATUSES:
                message = f"The AI provider rejected the API key (HTTP {status})"
            elif status is not None:
                message = f"The AI provider returned HTTP {status}"
            else:
                message = f"Could not reach the AI provider ({type(exc).__name__})"
            raise TransportError(message, status_code=status) from exc

        text = message_text(response)
        try:
            analysis = parse_analysis(text)
        except (EmptyResponseError, SchemaViolationError) as exc:
            logger.error("sentiment_parse_error", code=exc.code, chars=len(text), error=exc.message)
            raise

        logger.info(
            "sentiment_fetch_done",
            positive=len(analysis.top_positive),
            negative=len(analysis.top_negative),
            timestamp=analysis.timestamp,
        )
        return analysis
