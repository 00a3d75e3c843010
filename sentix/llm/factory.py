from langchain_core.language_models import LanguageModelInput
from langchain_core.messages import BaseMessage
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from sentix.config import settings
from sentix.exceptions import AppError
from sentix.llm.config import GOOGLE_SEARCH_TOOL, LLMProvider

ChatRunnable = Runnable[LanguageModelInput, BaseMessage]


class LLMFactory:
    @staticmethod
    def create(
        api_key: str,
        response_schema: dict | None = None,
        provider: str | None = None,
        model: str | None = None,
        **kwargs: object,
    ) -> ChatRunnable:
        provider = provider or settings.llm_provider
        model = model or settings.llm_model

        match provider:
            case LLMProvider.GOOGLE:
                if not api_key:
                    raise AppError("Google API key is not configured", code="LLM_CONFIG_ERROR")
                if settings.llm_temperature is not None:
                    kwargs.setdefault("temperature", settings.llm_temperature)
                if response_schema is not None:
                    kwargs.setdefault("response_mime_type", "application/json")
                    kwargs.setdefault("response_schema", response_schema)
                llm = ChatGoogleGenerativeAI(
                    model=model,
                    google_api_key=api_key,
                    timeout=settings.request_timeout,
                    max_retries=1,  # single attempt, no retry
                    **kwargs,  # type: ignore[arg-type]
                )
                return llm.bind_tools([GOOGLE_SEARCH_TOOL])

            case _:
                raise AppError(f"Unknown LLM provider: '{provider}'", code="LLM_CONFIG_ERROR")
