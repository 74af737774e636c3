"""Conversation sources and session storage."""

from .base import ConversationSource, ConversationSourceError, AuthenticationError, DEFAULT_ERROR_MESSAGE
from .session import SessionStore, InMemorySessionStore, JsonFileSessionStore, TOKEN_KEY, USER_KEY
from .http_source import HttpConversationSource, LoginResult
from .file_source import JsonFileConversationSource


def create_session_store(config) -> SessionStore:
    """JSON-file store when ``SESSION_FILE`` is configured, in-memory otherwise."""
    if getattr(config, "SESSION_FILE", None):
        return JsonFileSessionStore(config.SESSION_FILE)
    return InMemorySessionStore()


__all__ = [
    'ConversationSource', 'ConversationSourceError', 'AuthenticationError', 'DEFAULT_ERROR_MESSAGE',
    'SessionStore', 'InMemorySessionStore', 'JsonFileSessionStore', 'TOKEN_KEY', 'USER_KEY',
    'HttpConversationSource', 'LoginResult', 'JsonFileConversationSource', 'create_session_store',
]
