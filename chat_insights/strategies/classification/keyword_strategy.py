"""
Keyword heuristic for conversation outcome classification.
"""

import logging
from typing import Sequence

from ..base.classifier_strategy import ClassifierStrategy
from ...config.base_config import DEFAULT_WIN_KEYWORDS, DEFAULT_LOSE_KEYWORDS
from ...models.conversation import RawMessage, Status


logger = logging.getLogger(__name__)


class KeywordClassifierStrategy(ClassifierStrategy):
    """
    Classifies a conversation from the text of its last message.

    Rules, in order:
    - a single human message with no reply is ABIERTA
    - a win keyword in the last message is GANADA (checked before lose)
    - a lose keyword in the last message is PERDIDA
    - an exchange of more than two messages without a keyword is ABIERTA
    - anything else, including no messages at all, is PENDIENTE
    """

    def __init__(self, config=None):
        """
        Initialize the keyword classifier.

        Args:
            config: Configuration with optional WIN_KEYWORDS / LOSE_KEYWORDS
        """
        super().__init__(config)
        win_keywords = getattr(config, 'WIN_KEYWORDS', None)
        lose_keywords = getattr(config, 'LOSE_KEYWORDS', None)
        if win_keywords is None:
            win_keywords = DEFAULT_WIN_KEYWORDS
        if lose_keywords is None:
            lose_keywords = DEFAULT_LOSE_KEYWORDS
        self.win_keywords = [k.lower() for k in win_keywords]
        self.lose_keywords = [k.lower() for k in lose_keywords]
        logger.debug(f"Keyword classifier using {len(self.win_keywords)} win and "
                     f"{len(self.lose_keywords)} lose keywords")

    def classify(self, messages: Sequence[RawMessage]) -> Status:
        if not messages:
            return Status.PENDIENTE

        last_message = messages[-1]
        last_content = (last_message.content or "").lower()

        if len(messages) == 1 and last_message.is_human:
            return Status.ABIERTA

        if any(keyword in last_content for keyword in self.win_keywords):
            return Status.GANADA
        if any(keyword in last_content for keyword in self.lose_keywords):
            return Status.PERDIDA

        if len(messages) > 2:
            return Status.ABIERTA

        return Status.PENDIENTE
