"""
Conversation source backed by the chat REST API.

Authentication is token based: ``login`` posts the credentials to the auth
endpoint and stores the returned token in the session store; every request
then carries ``Authorization: Token <token>`` plus the configured extra
headers. A 401 response clears the stored session.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from .base import ConversationSource, ConversationSourceError, AuthenticationError, DEFAULT_ERROR_MESSAGE
from .session import SessionStore, InMemorySessionStore, TOKEN_KEY, USER_KEY

logger = logging.getLogger(__name__)

LOGIN_ERROR_MESSAGE = "Error al iniciar sesión"
NO_TOKEN_MESSAGE = "No se recibió token"
SESSION_EXPIRED_MESSAGE = "Sesión expirada, inicie sesión nuevamente"


def _json_object(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@dataclass
class LoginResult:
    success: bool
    token: Optional[str] = None
    message: Optional[str] = None


class HttpConversationSource(ConversationSource):
    """
    Fetch conversations from ``<API_BASE_URL><CHATS_ENDPOINT>``.

    Args:
        config: Configuration with the API settings
        session_store: Where the auth token is kept
        http_session: requests.Session to use; a new one is created if None
    """

    def __init__(self, config, session_store: Optional[SessionStore] = None,
                 http_session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = config.API_BASE_URL.rstrip("/")
        self.timeout = config.REQUEST_TIMEOUT
        self.extra_headers = dict(config.API_EXTRA_HEADERS or {})
        self.session_store = session_store or InMemorySessionStore()
        self.http = http_session or requests.Session()
        self.http.headers.update({"Content-Type": "application/json"})

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def get_token(self) -> Optional[str]:
        return self.session_store.get(TOKEN_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def _auth_headers(self) -> Dict[str, str]:
        token = self.get_token()
        if not token:
            return {}
        headers = {"Authorization": f"Token {token}"}
        headers.update(self.extra_headers)
        return headers

    def login(self, username: str, password: str) -> LoginResult:
        """
        Exchange credentials for a token and store it.

        Never raises; failures come back as ``LoginResult(success=False)``
        with the server's first ``non_field_errors`` message when present.
        """
        url = self._url(self.config.AUTH_ENDPOINT)
        try:
            response = self.http.post(url, json={"username": username, "password": password},
                                      timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Login request to {url} failed: {e}")
            return LoginResult(success=False, message=LOGIN_ERROR_MESSAGE)

        body = _json_object(response)
        if not response.ok:
            message = LOGIN_ERROR_MESSAGE
            errors = body.get("non_field_errors") or []
            if errors:
                message = errors[0]
            logger.warning(f"Login rejected with status {response.status_code}: {message}")
            return LoginResult(success=False, message=message)

        token = body.get("token")
        if not token:
            return LoginResult(success=False, message=NO_TOKEN_MESSAGE)

        self.session_store.set(TOKEN_KEY, token)
        logger.info(f"Logged in as {username}")
        return LoginResult(success=True, token=token)

    def logout(self):
        self.session_store.clear(TOKEN_KEY)
        self.session_store.clear(USER_KEY)

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        return self.session_store.get(USER_KEY)

    def set_current_user(self, user: Dict[str, Any]):
        self.session_store.set(USER_KEY, user)

    def fetch_all(self) -> List[Dict[str, Any]]:
        url = self._url(self.config.CHATS_ENDPOINT)
        try:
            response = self.http.get(url, headers=self._auth_headers(), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching chats from {url}: {e}")
            raise ConversationSourceError(DEFAULT_ERROR_MESSAGE) from e

        if response.status_code == 401:
            logger.warning("Chat API returned 401, clearing session")
            self.logout()
            raise AuthenticationError(SESSION_EXPIRED_MESSAGE, status_code=401)

        if not response.ok:
            logger.error(f"Error fetching chats: HTTP {response.status_code}")
            raise ConversationSourceError(
                f"{DEFAULT_ERROR_MESSAGE} (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Chat API returned invalid JSON: {e}")
            raise ConversationSourceError(DEFAULT_ERROR_MESSAGE) from e

        if not isinstance(data, list):
            raise ConversationSourceError(f"{DEFAULT_ERROR_MESSAGE}: se esperaba una lista de conversaciones")

        logger.info(f"Fetched {len(data)} conversations from {url}")
        return data
