"""Completion providers used by the ``llm`` classifier strategy."""

import logging
from typing import Any, Dict, List, Type

from .base import LLMProvider
from .mock import MockLLMProvider

logger = logging.getLogger(__name__)

LLM_PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "mock": MockLLMProvider,
}

# Vertex AI needs google-cloud-aiplatform; without it only the mock is offered
try:
    from .vertex_ai import VertexAIProvider
    LLM_PROVIDERS["vertex_ai"] = VertexAIProvider
except ImportError:
    logger.warning("Vertex AI provider unavailable: google-cloud-aiplatform is not installed")


def available_llm_providers() -> List[str]:
    return sorted(LLM_PROVIDERS)


def create_llm_provider(provider_name: str, config: Any) -> LLMProvider:
    """
    Build the provider registered under ``provider_name``.

    Raises:
        ValueError: If no provider has that name
    """
    if provider_name not in LLM_PROVIDERS:
        raise ValueError(f"Unknown LLM provider: {provider_name} "
                         f"(available: {', '.join(available_llm_providers())})")
    logger.debug(f"Creating LLM provider '{provider_name}'")
    return LLM_PROVIDERS[provider_name](config)
