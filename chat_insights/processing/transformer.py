"""
Turns raw chat sessions from the API into Conversation entities.
"""

import logging
import math
from datetime import datetime, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from .parser import parse_human_message, extract_products_mentioned, extract_tools_used
from ..models.conversation import (
    Conversation,
    HumanMessageInfo,
    RawConversation,
    DEFAULT_CLIENT_NAME,
    DEFAULT_CLIENT_PHONE,
)
from ..strategies.base import ClassifierStrategy
from ..strategies.classification import KeywordClassifierStrategy
from ..utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

RawInput = Union[RawConversation, Mapping[str, Any]]


class ConversationTransformer:
    """
    Builds Conversation entities by combining the message parser and a
    classifier strategy.
    """

    def __init__(self,
                 classifier: Optional[ClassifierStrategy] = None,
                 product_brands: Optional[Sequence[str]] = None,
                 tz: Optional[tzinfo] = None,
                 clock: Optional[Clock] = None):
        """
        Args:
            classifier: Strategy assigning the status (keyword heuristic by default)
            product_brands: Reference brand list for product mentions
            tz: Timezone for the calendar date; None means naive local time
            clock: Source of "now" for messages without a timestamp
        """
        self.classifier = classifier or KeywordClassifierStrategy()
        self.product_brands = product_brands
        self.tz = tz
        self.clock = clock or SystemClock(tz)

    def _validate(self, raw: RawInput, index: int) -> Optional[RawConversation]:
        if isinstance(raw, RawConversation):
            return raw
        if not isinstance(raw, Mapping):
            logger.warning(f"Skipping chat #{index}: expected an object, got {type(raw).__name__}")
            return None
        try:
            return RawConversation.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping chat #{index}: invalid payload ({e.error_count()} errors): {e}")
            return None

    def transform_single_chat(self, raw: RawInput, index: int) -> Optional[Conversation]:
        """
        Transform one raw chat session.

        Returns:
            The Conversation, or None when the record has no messages or is malformed
        """
        chat = self._validate(raw, index)
        if chat is None or not chat.messages:
            return None

        messages = chat.messages

        first_human = next((m for m in messages if m.is_human), None)
        human_info = parse_human_message(first_human.content) if first_human else HumanMessageInfo()

        timestamp = messages[0].timestamp or self.clock.now().timestamp()
        last_timestamp = messages[-1].timestamp or timestamp

        try:
            date = datetime.fromtimestamp(timestamp, self.tz)
        except (ValueError, OverflowError, OSError) as e:
            logger.warning(f"Skipping chat #{index}: unusable timestamp {timestamp!r} ({e})")
            return None
        if not math.isfinite(last_timestamp):
            last_timestamp = timestamp

        products: List[str] = []
        tools: List[str] = []
        for message in messages:
            if not message.is_ai:
                continue
            for product in extract_products_mentioned(message.content, self.product_brands):
                if product not in products:
                    products.append(product)
            for tool in extract_tools_used(message.content):
                if tool not in tools:
                    tools.append(tool)

        return Conversation(
            id=chat.session_id or f"chat-{index}",
            session_id=chat.session_id,
            client_name=human_info.name or DEFAULT_CLIENT_NAME,
            client_phone=human_info.phone or DEFAULT_CLIENT_PHONE,
            initial_message=human_info.message,
            date=date,
            timestamp=timestamp,
            last_timestamp=last_timestamp,
            duration=last_timestamp - timestamp,
            message_count=len(messages),
            status=self.classifier.classify(messages),
            products=tuple(products),
            tools=tuple(tools),
            messages=tuple(messages),
        )

    def transform_chat_data(self, chats: Optional[Iterable[RawInput]]) -> List[Conversation]:
        """
        Transform a list (or any other iterable) of raw chat sessions,
        dropping invalid ones.
        """
        if chats is None:
            return []
        if isinstance(chats, (str, bytes, Mapping)) or not isinstance(chats, Iterable):
            logger.warning(f"Expected a list of chats, got {type(chats).__name__}")
            return []
        chats = list(chats)

        conversations = []
        for index, chat in enumerate(chats):
            conversation = self.transform_single_chat(chat, index)
            if conversation is not None:
                conversations.append(conversation)

        dropped = len(chats) - len(conversations)
        if dropped:
            logger.info(f"Transformed {len(conversations)} conversations ({dropped} skipped)")
        return conversations


def transform_single_chat(raw: RawInput, index: int,
                          classifier: Optional[ClassifierStrategy] = None,
                          tz: Optional[tzinfo] = None) -> Optional[Conversation]:
    """Transform one raw chat session with a default transformer."""
    return ConversationTransformer(classifier=classifier, tz=tz).transform_single_chat(raw, index)


def transform_chat_data(chats: Optional[Iterable[RawInput]],
                        classifier: Optional[ClassifierStrategy] = None,
                        tz: Optional[tzinfo] = None) -> List[Conversation]:
    """Transform a list of raw chat sessions with a default transformer."""
    return ConversationTransformer(classifier=classifier, tz=tz).transform_chat_data(chats)
