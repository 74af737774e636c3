"""
Builders shared by the test modules.
"""

from datetime import datetime

from chat_insights.models import Conversation, RawMessage, Status


def ts(*args) -> float:
    """Epoch seconds for a naive local datetime."""
    return datetime(*args).timestamp()


def human(content, timestamp=None):
    data = {"content": content}
    if timestamp is not None:
        data["timestamp"] = timestamp
    return {"type": "human", "data": data}


def ai(content, timestamp=None):
    data = {"content": content}
    if timestamp is not None:
        data["timestamp"] = timestamp
    return {"type": "ai", "data": data}


def raw_chat(session_id, *messages):
    return {"sessionID": session_id, "messages": list(messages)}


def make_conversation(conversation_id, date, status=Status.ABIERTA, products=(), tools=(),
                      client_name="Juan Pérez", client_phone="56912345678",
                      initial_message="Hola", duration=60.0, message_count=2, messages=()):
    return Conversation(
        id=conversation_id,
        session_id=conversation_id,
        client_name=client_name,
        client_phone=client_phone,
        initial_message=initial_message,
        date=date,
        timestamp=date.timestamp(),
        last_timestamp=date.timestamp() + duration,
        duration=duration,
        message_count=message_count,
        status=status,
        products=tuple(products),
        tools=tuple(tools),
        messages=tuple(RawMessage.model_validate(m) for m in messages),
    )
