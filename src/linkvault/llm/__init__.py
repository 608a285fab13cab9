"""LLM provider factory."""

from ..config import OPENROUTER_BASE_URL, Config
from .anthropic import AnthropicProvider
from .base import LLMProvider
from .openai import OpenAIProvider


def get_llm_provider(config: Config) -> LLMProvider:
    """Create and return the configured LLM provider."""
    if config.llm_provider == "claude":
        return AnthropicProvider(
            api_key=config.anthropic_api_key,
            model=config.default_model,
        )
    if config.llm_provider == "openrouter":
        return OpenAIProvider(
            api_key=config.openrouter_api_key,
            model=config.default_model,
            base_url=OPENROUTER_BASE_URL,
        )
    return OpenAIProvider(
        api_key=config.openai_api_key,
        model=config.default_model,
    )
