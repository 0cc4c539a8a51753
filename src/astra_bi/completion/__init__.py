"""Completion-service clients."""

from astra_bi.completion.base import CompletionClient
from astra_bi.completion.openai_client import OpenAICompletionClient
from astra_bi.completion.stub import HeuristicCompletionClient
from astra_bi.config import (
    DEFAULT_GROQ_MODEL,
    DEFAULT_OPENAI_MODEL,
    GROQ_BASE_URL,
    Settings,
)
from astra_bi.errors import ConfigError


def get_completion_client(settings: Settings) -> CompletionClient:
    """
    Build the client for settings.provider:
    - "groq" -> Groq's OpenAI-compatible API (needs GROQ_API_KEY)
    - "openai" -> OpenAI API (needs OPENAI_API_KEY)
    - "stub" -> offline heuristic client
    """
    provider = settings.provider
    if provider == "groq":
        if not settings.groq_api_key:
            raise ConfigError("GROQ_API_KEY is required for the groq provider")
        return OpenAICompletionClient(
            model=settings.llm_model or DEFAULT_GROQ_MODEL,
            api_key=settings.groq_api_key,
            base_url=settings.llm_base_url or GROQ_BASE_URL,
            timeout=settings.timeout,
            max_retries=settings.llm_max_retries,
        )
    if provider == "openai":
        if not settings.openai_api_key:
            raise ConfigError("OPENAI_API_KEY is required for the openai provider")
        return OpenAICompletionClient(
            model=settings.llm_model or DEFAULT_OPENAI_MODEL,
            api_key=settings.openai_api_key,
            base_url=settings.llm_base_url,
            timeout=settings.timeout,
            max_retries=settings.llm_max_retries,
        )
    if provider == "stub":
        return HeuristicCompletionClient()
    raise ConfigError(f"Unknown LLM provider: {provider}. Available: groq, openai, stub")


__all__ = [
    "CompletionClient",
    "HeuristicCompletionClient",
    "OpenAICompletionClient",
    "get_completion_client",
]
