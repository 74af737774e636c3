"""
Default configuration for the sales chat dashboard.
"""

import os

# Chat API
API_BASE_URL = os.environ.get("CHAT_INSIGHTS_API_URL", "http://localhost:8000")
CHATS_ENDPOINT = "/chats/"
AUTH_ENDPOINT = "/api-token-auth/"
API_EXTRA_HEADERS = {
    "header-auth-integra": os.environ.get("CHAT_INSIGHTS_INTEGRATION_HEADER", ""),
}
REQUEST_TIMEOUT = 30

# Session storage
SESSION_FILE = os.path.expanduser("~/.chat_insights/session.json")

# Classification
CLASSIFIER_STRATEGY = "keyword"

# LLM settings (used with CLASSIFIER_STRATEGY = "llm")
LLM_PROVIDER = "mock"
PROJECT_ID = os.environ.get("GOOGLE_CLOUD_PROJECT", "")
LOCATION = "us-central1"
MODEL_NAME = "gemini-1.5-flash-002"
TEMPERATURE = 0.0
TOP_P = 1
TOP_K = 40

# Dashboard
TIMEZONE = "America/Santiago"
DEFAULT_DATE_PRESET = "30days"
DEFAULT_PERIOD = "day"
TOP_PRODUCTS_LIMIT = 10
PEAK_HOURS_TOP_N = 10
TABLE_PAGE_SIZE = 5

# Output
OUTPUT_DIR = "reports"
LOG_FILE = "chat_insights.log"
