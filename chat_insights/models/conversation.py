"""
Models for conversation data structures.

Raw payloads coming from the chat API are validated with pydantic; the
derived Conversation entity is an immutable dataclass.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Status(str, Enum):
    """
    Outcome label assigned to a conversation.
    """
    ABIERTA = "ABIERTA"
    GANADA = "GANADA"
    PERDIDA = "PERDIDA"
    PENDIENTE = "PENDIENTE"

    def __str__(self) -> str:
        return self.value


# Filter sentinel meaning "every status"; never assigned to a conversation.
STATUS_ALL = "TODAS"

# Attribute used for each status in per-status counters.
STATUS_FIELDS: Dict[Status, str] = {
    Status.ABIERTA: "open",
    Status.GANADA: "won",
    Status.PERDIDA: "lost",
    Status.PENDIENTE: "pending",
}

MESSAGE_TYPE_HUMAN = "human"
MESSAGE_TYPE_AI = "ai"

DEFAULT_CLIENT_NAME = "Desconocido"
DEFAULT_CLIENT_PHONE = "Sin teléfono"


class RawMessageData(BaseModel):
    """Payload of a single message as received from the API."""
    model_config = ConfigDict(extra="allow")

    content: str = ""
    timestamp: Optional[float] = None

    @field_validator("content", mode="before")
    @classmethod
    def _none_content_is_empty(cls, value):
        return "" if value is None else value


class RawMessage(BaseModel):
    """A message in a raw conversation: ``{"type": ..., "data": {...}}``."""
    model_config = ConfigDict(extra="allow")

    type: str
    data: RawMessageData = Field(default_factory=RawMessageData)

    @field_validator("data", mode="before")
    @classmethod
    def _none_data_is_empty(cls, value):
        return {} if value is None else value

    @property
    def content(self) -> str:
        return self.data.content

    @property
    def timestamp(self) -> Optional[float]:
        return self.data.timestamp

    @property
    def is_human(self) -> bool:
        return self.type == MESSAGE_TYPE_HUMAN

    @property
    def is_ai(self) -> bool:
        return self.type == MESSAGE_TYPE_AI


class RawConversation(BaseModel):
    """A chat session as returned by ``GET /chats/``."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionID")
    messages: List[RawMessage] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def _none_messages_is_empty(cls, value):
        return [] if value is None else value


@dataclass(frozen=True)
class HumanMessageInfo:
    """
    Fields parsed from the first human message of a conversation.
    """
    phone: str = ""
    name: str = ""
    message: str = ""


@dataclass(frozen=True)
class Conversation:
    """
    Normalized conversation derived from a raw chat session.

    Instances are never mutated; filters and aggregations build new values.
    """
    id: str
    session_id: Optional[str]
    client_name: str
    client_phone: str
    initial_message: str
    date: datetime
    timestamp: float
    last_timestamp: float
    duration: float
    message_count: int
    status: Status
    products: Tuple[str, ...] = field(default_factory=tuple)
    tools: Tuple[str, ...] = field(default_factory=tuple)
    messages: Tuple[RawMessage, ...] = field(default_factory=tuple, repr=False)

    def to_dict(self, include_messages: bool = False) -> Dict[str, Any]:
        """
        Convert the conversation to a dictionary for serialization.
        """
        result = {
            "id": self.id,
            "sessionID": self.session_id,
            "clientName": self.client_name,
            "clientPhone": self.client_phone,
            "initialMessage": self.initial_message,
            "date": self.date.isoformat(),
            "timestamp": self.timestamp,
            "lastTimestamp": self.last_timestamp,
            "duration": self.duration,
            "messageCount": self.message_count,
            "status": self.status.value,
            "products": list(self.products),
            "tools": list(self.tools),
        }
        if include_messages:
            result["messages"] = [message.model_dump(mode="json") for message in self.messages]
        return result
