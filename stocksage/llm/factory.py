from enum import StrEnum

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from stocksage.config import settings
from stocksage.exceptions import AppError
from stocksage.llm.client import StructuredModelClient


class LLMProvider(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class LLMFactory:
    @staticmethod
    def create(
        provider: str | None = None,
        model: str | None = None,
        **kwargs: object,
    ) -> BaseChatModel:
        provider = provider or settings.llm_provider
        model = model or settings.llm_model
        # Each analysis is a single model call; provider-side retries stay off.
        kwargs.setdefault("max_retries", 0)
        kwargs.setdefault("temperature", settings.llm_temperature)

        match provider:
            case LLMProvider.OPENAI:
                if not settings.openai_api_key:
                    raise AppError("OpenAI API key is not configured", code="LLM_CONFIG_ERROR")
                return ChatOpenAI(
                    model=model,
                    api_key=settings.openai_api_key,  # type: ignore[arg-type]
                    **kwargs,
                )

            case LLMProvider.ANTHROPIC:
                if not settings.anthropic_api_key:
                    raise AppError("Anthropic API key is not configured", code="LLM_CONFIG_ERROR")
                return ChatAnthropic(
                    model=model,  # type: ignore[call-arg]
                    api_key=settings.anthropic_api_key,  # type: ignore[arg-type]
                    **kwargs,
                )

            case _:
                raise AppError(f"Unknown LLM provider: '{provider}'", code="LLM_CONFIG_ERROR")

    @classmethod
    def create_client(
        cls,
        provider: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> StructuredModelClient:
        """Build the structured-output client used by the analysis flow."""
        llm = cls.create(provider, model)
        return StructuredModelClient(llm, timeout=timeout or settings.llm_timeout_seconds)
