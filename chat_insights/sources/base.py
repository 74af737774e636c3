"""
Base interface for conversation sources.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

DEFAULT_ERROR_MESSAGE = "Error al cargar los datos"


class ConversationSourceError(Exception):
    """Fetching conversations failed; ``message`` is safe to show to users."""

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ConversationSourceError):
    """The source rejected the credentials or the stored token."""


class ConversationSource(ABC):
    """
    Supplies raw conversations in their wire format:
    ``[{"sessionID": ..., "messages": [{"type": ..., "data": {...}}]}]``.
    """

    @abstractmethod
    def fetch_all(self) -> List[Dict[str, Any]]:
        """
        Fetch every raw conversation.

        Raises:
            ConversationSourceError: if the conversations cannot be fetched
        """
        pass
