"""
Vertex AI implementation of LLM provider (google-cloud-aiplatform SDK).
"""

import asyncio
import logging
import random
import time
from typing import Optional

import vertexai
from vertexai.generative_models import GenerativeModel, GenerationConfig

from .base import LLMProvider

# Get a logger instance for this module
logger = logging.getLogger(__name__)


class VertexAIProvider(LLMProvider):
    """
    LLM provider implementation for Google Cloud Vertex AI Gemini models.
    """

    def __init__(self, config):
        """
        Initialize the Vertex AI provider with configuration.

        Args:
            config: Configuration object with Vertex AI settings
        """
        super().__init__(config)
        self.project_id = getattr(config, 'PROJECT_ID', '')
        self.location = getattr(config, 'LOCATION', 'us-central1')
        self.model_name = getattr(config, 'MODEL_NAME', 'gemini-1.5-flash-002').split('/')[-1].lower()
        self.temperature = getattr(config, 'TEMPERATURE', 0.0)
        self.top_p = getattr(config, 'TOP_P', 1.0)
        self.top_k = getattr(config, 'TOP_K', 40)
        self.max_output_tokens = getattr(config, 'MAX_OUTPUT_TOKENS', 16)
        self.llm = None

    async def initialize(self):
        """
        Initialize the Vertex AI SDK and the generative model.
        """
        logger.info(f"Initializing Vertex AI with project '{self.project_id}' in {self.location}")
        try:
            vertexai.init(project=self.project_id, location=self.location)
            self.llm = GenerativeModel(self.model_name)
        except Exception as e:
            logger.error(f"Error initializing AI service: {e}", exc_info=True)
            raise
        logger.info(f"Successfully initialized Vertex AI model: {self.model_name}")

    async def generate_content(self, prompt: str, max_tokens: Optional[int] = None) -> Optional[str]:
        """
        Single attempt; delegates to retry_with_backoff with no retries.
        """
        return await self.retry_with_backoff(prompt=prompt, max_retries=0)

    async def retry_with_backoff(self, prompt: str, max_retries: int = 3,
                                 initial_backoff: float = 1.0, max_backoff: float = 16.0,
                                 backoff_factor: float = 2.0) -> Optional[str]:
        """
        Call Vertex AI with exponential backoff on rate-limit errors.

        Returns:
            Generated content as a string, or None on failure after retries.
        """
        if self.llm is None:
            await self.initialize()

        generation_config = GenerationConfig(
            temperature=self.temperature, top_p=self.top_p, top_k=self.top_k,
            max_output_tokens=self.max_output_tokens,
        )
        backoff = initial_backoff
        start_time_overall = time.monotonic()

        for attempt in range(max_retries + 1):
            log_prefix = f"LLM call attempt {attempt + 1}/{max_retries + 1}"
            try:
                response = await self.llm.generate_content_async(
                    contents=[prompt],
                    generation_config=generation_config,
                    stream=False
                )
                if not response.candidates:
                    safety_ratings = getattr(getattr(response, 'prompt_feedback', None), 'safety_ratings', 'N/A')
                    raise ValueError(f"Response had no candidates. Safety: {safety_ratings}")
                text = response.candidates[0].content.text
                logger.debug(f"{log_prefix} succeeded after {time.monotonic() - start_time_overall:.3f}s")
                return text.strip()

            except Exception as e:
                error_message = str(e)
                logger.warning(f"{log_prefix} failed: {error_message}")

                is_rate_limit = ("429" in error_message or "quota" in error_message.lower() or
                                 "rate limit" in error_message.lower() or
                                 "resource exhausted" in error_message.lower())

                if is_rate_limit and attempt < max_retries:
                    sleep_time = backoff + random.uniform(0, 0.25 * backoff)
                    logger.info(f"{log_prefix}: Rate limit/resource error. Retrying in {sleep_time:.2f}s...")
                    await asyncio.sleep(sleep_time)
                    backoff = min(backoff * backoff_factor, max_backoff)
                else:
                    logger.error(f"{log_prefix}: giving up: {e}")
                    return None

        return None
