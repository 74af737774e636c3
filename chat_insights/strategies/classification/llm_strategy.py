"""
Model-based conversation classification.
"""

import asyncio
import logging
import re
from typing import Optional, Sequence

from ..base.classifier_strategy import ClassifierStrategy
from .keyword_strategy import KeywordClassifierStrategy
from ...llm.base import LLMProvider
from ...models.conversation import RawMessage, Status

logger = logging.getLogger(__name__)

LABEL_PATTERN = re.compile(r"\b(ABIERTA|GANADA|PERDIDA|PENDIENTE)\b")

PROMPT_TEMPLATE = """Eres un analista de ventas. Clasifica la siguiente conversación de ventas
en exactamente una de estas etiquetas:
- ABIERTA: conversación activa sin conclusión
- GANADA: el cliente quiere comprar, confirma o pide precio/cotización
- PERDIDA: el cliente rechaza o pospone la compra
- PENDIENTE: no hay suficiente información

Responde solo con la etiqueta.

Conversación:
{transcript}
"""


class LLMClassifierStrategy(ClassifierStrategy):
    """
    Asks an LLM provider for the conversation label.

    Falls back to the keyword heuristic when the provider fails or answers
    with something that is not one of the four labels.
    """

    def __init__(self, config, llm_provider: Optional[LLMProvider] = None,
                 fallback: Optional[ClassifierStrategy] = None):
        super().__init__(config)
        if llm_provider is None:
            from ...llm import create_llm_provider
            llm_provider = create_llm_provider(getattr(config, 'LLM_PROVIDER', 'mock'), config)
        self.llm_provider = llm_provider
        self.fallback = fallback or KeywordClassifierStrategy(config)
        self.max_transcript_messages = getattr(config, 'LLM_MAX_TRANSCRIPT_MESSAGES', 20)

    def build_prompt(self, messages: Sequence[RawMessage]) -> str:
        recent = list(messages)[-self.max_transcript_messages:]
        transcript = "\n".join(
            f"{'Cliente' if m.is_human else 'Asistente'}: {m.content.strip()}" for m in recent
        )
        return PROMPT_TEMPLATE.format(transcript=transcript)

    def parse_label(self, response: Optional[str]) -> Optional[Status]:
        if not response:
            return None
        match = LABEL_PATTERN.search(response.upper())
        return Status(match.group(1)) if match else None

    def classify(self, messages: Sequence[RawMessage]) -> Status:
        if not messages:
            return Status.PENDIENTE

        try:
            response = asyncio.run(self.llm_provider.retry_with_backoff(self.build_prompt(messages)))
        except Exception as e:
            logger.error(f"LLM classification failed, using keyword fallback: {e}", exc_info=True)
            return self.fallback.classify(messages)
        label = self.parse_label(response)
        if label is None:
            logger.warning(f"LLM returned no usable label ({response!r}); using keyword fallback")
            return self.fallback.classify(messages)
        return label
