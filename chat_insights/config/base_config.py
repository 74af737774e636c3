"""
Base configuration class for Chat Insights.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


DEFAULT_PRODUCT_BRANDS = [
    "Leviton", "Schneider", "ABB", "Siemens", "General Electric", "GE",
    "Legrand", "Eaton", "Philips", "Osram", "Sylvania", "Hubbell",
]

# Purchase, confirmation and pricing intent
DEFAULT_WIN_KEYWORDS = [
    "comprar", "compra", "acepto", "proceder", "cotización", "cotizacion",
    "precio", "cuánto cuesta", "cuanto cuesta", "enviar", "pedido",
    "confirmar", "si", "gracias", "perfecto", "ok", "vale", "orden",
]

# Decline and postpone
DEFAULT_LOSE_KEYWORDS = [
    "no gracias", "no me interesa", "muy caro", "caro", "no necesito",
    "no quiero", "cancelar", "después", "otro día", "no ahora",
]


@dataclass
class BaseConfig:
    """
    Base configuration with common settings.
    """

    RUN_ID: Optional[str] = None

    # Chat API settings
    API_BASE_URL: str = "http://localhost:8000"
    CHATS_ENDPOINT: str = "/chats/"
    AUTH_ENDPOINT: str = "/api-token-auth/"
    API_EXTRA_HEADERS: Dict[str, str] = field(default_factory=dict)
    REQUEST_TIMEOUT: float = 30.0

    # Session storage (None keeps the session in memory)
    SESSION_FILE: Optional[str] = None

    # Parsing and classification
    PRODUCT_BRANDS: List[str] = field(default_factory=lambda: list(DEFAULT_PRODUCT_BRANDS))
    WIN_KEYWORDS: List[str] = field(default_factory=lambda: list(DEFAULT_WIN_KEYWORDS))
    LOSE_KEYWORDS: List[str] = field(default_factory=lambda: list(DEFAULT_LOSE_KEYWORDS))
    CLASSIFIER_STRATEGY: str = "keyword"

    # LLM settings (only used by the "llm" classifier strategy)
    LLM_PROVIDER: str = "mock"
    PROJECT_ID: str = ""
    MODEL_NAME: str = "gemini-1.5-flash-002"
    LOCATION: str = "us-central1"
    TEMPERATURE: float = 0.0
    TOP_P: float = 1.0
    TOP_K: int = 40
    MOCK_LLM_RESPONSE: str = "PENDIENTE"
    LLM_MAX_TRANSCRIPT_MESSAGES: int = 20

    # Dashboard settings
    TIMEZONE: Optional[str] = None  # IANA name; None uses the local timezone
    DEFAULT_DATE_PRESET: str = "30days"
    DEFAULT_PERIOD: str = "day"
    TOP_PRODUCTS_LIMIT: int = 10
    PEAK_HOURS_TOP_N: int = 10
    TABLE_PAGE_SIZE: int = 5

    # Output settings
    OUTPUT_DIR: str = "reports"

    # Logging
    LOG_FILE: str = "chat_insights.log"

    def __post_init__(self):
        """Validate and normalize config after initialization."""
        # Ensure lists are initialized if they were None
        if self.PRODUCT_BRANDS is None:
            self.PRODUCT_BRANDS = list(DEFAULT_PRODUCT_BRANDS)
        if self.WIN_KEYWORDS is None:
            self.WIN_KEYWORDS = list(DEFAULT_WIN_KEYWORDS)
        if self.LOSE_KEYWORDS is None:
            self.LOSE_KEYWORDS = list(DEFAULT_LOSE_KEYWORDS)
        if self.API_EXTRA_HEADERS is None:
            self.API_EXTRA_HEADERS = {}
        self.API_BASE_URL = self.API_BASE_URL.rstrip("/")
