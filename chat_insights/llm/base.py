"""
Provider interface for the model-based status classifier.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LLMProvider(ABC):
    """
    Asynchronous text-completion backend.

    The classifier sends one prompt per conversation and only needs the
    answer text back, so every method returns ``None`` instead of raising
    when the backend cannot produce an answer.
    """

    def __init__(self, config):
        self.config = config

    @abstractmethod
    async def initialize(self):
        """Create clients; called lazily before the first completion."""

    @abstractmethod
    async def generate_content(self, prompt: str, max_tokens: Optional[int] = None) -> Optional[str]:
        """
        One completion attempt.

        Args:
            prompt: Full prompt, transcript included
            max_tokens: Output limit; provider default when None

        Returns:
            Answer text, or None on failure
        """

    @abstractmethod
    async def retry_with_backoff(self, prompt: str, max_retries: int = 3,
                                 initial_backoff: float = 1.0, max_backoff: float = 16.0) -> Optional[str]:
        """
        Completion that retries rate-limited calls, waiting ``initial_backoff``
        seconds and doubling up to ``max_backoff``.

        Returns:
            Answer text, or None once retries are exhausted
        """
