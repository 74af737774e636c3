"""
Offline provider returning a fixed label.
"""

import logging
from typing import Optional

from .base import LLMProvider


logger = logging.getLogger(__name__)


class MockLLMProvider(LLMProvider):
    """
    Answers every prompt with ``MOCK_LLM_RESPONSE`` and records the prompts
    it received.
    """

    def __init__(self, config):
        super().__init__(config)
        self.response = getattr(config, 'MOCK_LLM_RESPONSE', 'PENDIENTE')
        self.prompts = []

    async def initialize(self):
        logger.debug("Mock LLM provider ready")

    async def generate_content(self, prompt: str, max_tokens: Optional[int] = None) -> Optional[str]:
        self.prompts.append(prompt)
        logger.debug(f"Mock label '{self.response}' for prompt #{len(self.prompts)}")
        return self.response

    async def retry_with_backoff(self, prompt: str, max_retries: int = 3,
                                 initial_backoff: float = 1.0, max_backoff: float = 16.0) -> Optional[str]:
        return await self.generate_content(prompt)
