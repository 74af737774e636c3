"""
Conversation source reading a local JSON export of the chat API.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .base import ConversationSource, ConversationSourceError


logger = logging.getLogger(__name__)


class JsonFileConversationSource(ConversationSource):
    """
    Reads a JSON file holding the list returned by the chats endpoint.
    A ``{"chats": [...]}`` wrapper is accepted as well.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def fetch_all(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConversationSourceError(f"No se encontró el archivo {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading {self.path}: {e}")
            raise ConversationSourceError(f"Error al leer {self.path}") from e

        if isinstance(data, dict) and isinstance(data.get("chats"), list):
            data = data["chats"]
        if not isinstance(data, list):
            raise ConversationSourceError(f"{self.path} no contiene una lista de conversaciones")

        logger.info(f"Loaded {len(data)} conversations from {self.path}")
        return data
