"""LLM provider connectors."""
from csv_llm_fill.config.settings import Settings

from .api_connector import ChatCompletionConnector
from .base_connector import BaseConnector
from .gpt import GPTConnector
from .perplexity import PerplexityConnector

PROVIDERS = ('perplexity', 'gpt')


def create_connector(provider: str, settings: Settings) -> ChatCompletionConnector:
    """
    Build the connector for a provider from run settings.

    Args:
        provider: 'perplexity' or 'gpt'
        settings: Resolved settings

    Returns:
        Connector instance

    Raises:
        ValueError: If the provider is unknown
    """
    if provider == 'perplexity':
        return PerplexityConnector(
            model=settings.perplexity_model,
            system_prompt=settings.perplexity_system_prompt,
            api_key=settings.perplexity_api_key,
            timeout=settings.request_timeout,
        )
    if provider == 'gpt':
        return GPTConnector(
            model=settings.gpt_model,
            system_prompt=settings.gpt_system_prompt,
            api_key=settings.gpt_api_key,
            timeout=settings.request_timeout,
        )
    raise ValueError(f'Unknown service: {provider}')


__all__ = [
    "BaseConnector",
    "ChatCompletionConnector",
    "GPTConnector",
    "PerplexityConnector",
    "PROVIDERS",
    "create_connector",
]
