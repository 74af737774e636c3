"""
Base class for conversation classification strategies.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ...models.conversation import RawMessage, Status


class ClassifierStrategy(ABC):
    """
    Abstract base class for conversation classification strategies.

    A strategy looks at the ordered messages of one conversation and returns
    exactly one Status. Keyword heuristics and model-based classifiers are
    interchangeable behind this interface.
    """

    def __init__(self, config=None):
        """
        Initialize the classifier strategy with configuration.

        Args:
            config: Configuration object with necessary settings (optional)
        """
        self.config = config

    @abstractmethod
    def classify(self, messages: Sequence[RawMessage]) -> Status:
        """
        Classify a conversation.

        Args:
            messages: Messages of the conversation in chronological order

        Returns:
            The Status of the conversation
        """
        pass
