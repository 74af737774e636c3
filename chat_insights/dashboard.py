"""
Dashboard controller: loads conversations from a source and derives the
filtered view, KPIs and chart data from them.

Every load is tagged with a monotonically increasing request token. A response
is only applied if its token is still the latest one issued, so a slow,
superseded fetch can never overwrite the result of a newer one.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .analytics import (
    calculate_kpis,
    get_conversation_metrics,
    status_breakdown,
    group_chats_by_period,
    analyze_product_mentions,
    get_peak_hours,
    analyze_by_day_of_week,
)
from .config import BaseConfig
from .models import Conversation, FilterSpec, KPISummary, StatusSlice
from .models.analytics import PeriodBucket, ProductStats, HourSlot, DayOfWeekSlot, ConversationMetrics
from .processing import ConversationTransformer, apply_filters, get_active_filters_description, has_active_filters
from .processing.filters import Filters
from .sources import ConversationSource, ConversationSourceError, DEFAULT_ERROR_MESSAGE
from .strategies import create_classifier_strategy
from .strategies.base import ClassifierStrategy
from .utils.clock import Clock, SystemClock, resolve_timezone

logger = logging.getLogger(__name__)

RECENT_CONVERSATIONS_LIMIT = 10


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class DashboardState:
    load_state: LoadState = LoadState.IDLE
    error: Optional[str] = None
    loaded_at: Optional[datetime] = None
    request_token: int = 0

    @property
    def loading(self) -> bool:
        return self.load_state == LoadState.LOADING


class DashboardController:
    """
    Owns the conversation list, the active filters and the load state of the
    executive dashboard.

    Args:
        source: Where raw conversations come from
        config: Dashboard configuration
        classifier: Status classifier; built from ``CLASSIFIER_STRATEGY`` if None
        clock: Source of "now" for date presets
        filters: Initial filters; ``DEFAULT_DATE_PRESET`` with all statuses if None
    """

    def __init__(self, source: ConversationSource, config: Optional[BaseConfig] = None,
                 classifier: Optional[ClassifierStrategy] = None,
                 clock: Optional[Clock] = None, filters: Optional[FilterSpec] = None):
        self.source = source
        self.config = config or BaseConfig()
        tz = resolve_timezone(self.config.TIMEZONE)
        self.clock = clock or SystemClock(tz)
        self.transformer = ConversationTransformer(
            classifier=classifier or create_classifier_strategy(self.config.CLASSIFIER_STRATEGY, self.config),
            product_brands=self.config.PRODUCT_BRANDS,
            tz=tz,
            clock=self.clock,
        )
        self.filters = filters if filters is not None else FilterSpec(date_preset=self.config.DEFAULT_DATE_PRESET)
        self.period = self.config.DEFAULT_PERIOD

        self.state = DashboardState()
        self.conversations: List[Conversation] = []
        self._lock = threading.Lock()

    # Load lifecycle

    def begin_request(self) -> int:
        """Issue a new request token and enter the loading state."""
        with self._lock:
            self.state.request_token += 1
            self.state.load_state = LoadState.LOADING
            self.state.error = None
            return self.state.request_token

    def is_current(self, token: int) -> bool:
        return token == self.state.request_token

    def complete_request(self, token: int, conversations: List[Conversation]) -> bool:
        """
        Apply a successful load. Returns False when the token is stale and the
        result was discarded.
        """
        with self._lock:
            if not self.is_current(token):
                logger.info(f"Discarding stale response for request {token} "
                            f"(latest is {self.state.request_token})")
                return False
            self.conversations = list(conversations)
            self.state.load_state = LoadState.READY
            self.state.error = None
            self.state.loaded_at = self.clock.now()
        logger.info(f"Dashboard loaded {len(conversations)} conversations")
        return True

    def fail_request(self, token: int, error: Any) -> bool:
        """
        Record a failed load. Previously loaded conversations are kept.
        Returns False when the token is stale and the error was discarded.
        """
        message = getattr(error, "message", None) or str(error or "") or DEFAULT_ERROR_MESSAGE
        with self._lock:
            if not self.is_current(token):
                logger.info(f"Discarding stale error for request {token}: {message}")
                return False
            self.state.load_state = LoadState.ERROR
            self.state.error = message
        logger.error(f"Dashboard load failed: {message}")
        return True

    def fetch_conversations(self) -> List[Conversation]:
        """Fetch from the source and transform. Blocking."""
        raw_chats = self.source.fetch_all()
        return self.transformer.transform_chat_data(raw_chats)

    def load(self) -> bool:
        """
        Fetch and transform synchronously.

        Returns:
            True if the dashboard is ready afterwards
        """
        token = self.begin_request()
        try:
            conversations = self.fetch_conversations()
        except ConversationSourceError as e:
            self.fail_request(token, e)
            return False
        except Exception:
            self.fail_request(token, DEFAULT_ERROR_MESSAGE)
            raise
        return self.complete_request(token, conversations)

    def retry(self) -> bool:
        """Re-run the same load after an error."""
        return self.load()

    async def refresh(self) -> bool:
        """
        Asynchronous load; the blocking fetch and transform run in a worker
        thread so the event loop stays responsive.
        """
        token = self.begin_request()
        try:
            conversations = await asyncio.to_thread(self.fetch_conversations)
        except ConversationSourceError as e:
            self.fail_request(token, e)
            return False
        except Exception:
            self.fail_request(token, DEFAULT_ERROR_MESSAGE)
            raise
        return self.complete_request(token, conversations)

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    @property
    def is_empty(self) -> bool:
        return self.state.load_state == LoadState.READY and not self.conversations

    # Filters

    def set_filters(self, filters: Filters):
        self.filters = filters if isinstance(filters, FilterSpec) else FilterSpec.from_dict(filters)

    def update_filter(self, key: str, value: Any):
        """Change one filter, by attribute name or front-end camelCase key."""
        self.filters = self.filters.with_value(key, value)

    def clear_filters(self):
        self.filters = FilterSpec()

    def set_period(self, period: str):
        self.period = period

    @property
    def has_active_filters(self) -> bool:
        return has_active_filters(self.filters)

    @property
    def active_filters(self) -> List[str]:
        return get_active_filters_description(self.filters)

    # Derived data

    @property
    def filtered_conversations(self) -> List[Conversation]:
        return apply_filters(self.conversations, self.filters, self.clock)

    @property
    def kpis(self) -> KPISummary:
        return calculate_kpis(self.filtered_conversations, self.config.TOP_PRODUCTS_LIMIT)

    @property
    def metrics(self) -> ConversationMetrics:
        return get_conversation_metrics(self.filtered_conversations)

    @property
    def time_series(self) -> List[PeriodBucket]:
        return group_chats_by_period(self.filtered_conversations, self.period)

    @property
    def product_ranking(self) -> List[ProductStats]:
        return analyze_product_mentions(self.filtered_conversations)[:self.config.TOP_PRODUCTS_LIMIT]

    @property
    def peak_hours(self) -> List[HourSlot]:
        return get_peak_hours(self.filtered_conversations, self.config.PEAK_HOURS_TOP_N)

    @property
    def day_of_week(self) -> List[DayOfWeekSlot]:
        return analyze_by_day_of_week(self.filtered_conversations)

    @property
    def status_breakdown(self) -> List[StatusSlice]:
        return status_breakdown(self.kpis)

    @property
    def recent_conversations(self) -> List[Conversation]:
        return self.filtered_conversations[:RECENT_CONVERSATIONS_LIMIT]

    def snapshot(self) -> Dict[str, Any]:
        """
        Everything the dashboard shows, as plain dicts with camelCase keys.
        """
        filtered = self.filtered_conversations
        kpis = calculate_kpis(filtered, self.config.TOP_PRODUCTS_LIMIT)
        return {
            "state": self.state.load_state.value,
            "error": self.state.error,
            "filters": self.filters.to_dict(),
            "activeFilters": self.active_filters,
            "totalLoaded": len(self.conversations),
            "totalFiltered": len(filtered),
            "kpis": kpis.to_dict(),
            "metrics": get_conversation_metrics(filtered).to_dict(),
            "statusBreakdown": [s.to_dict() for s in status_breakdown(kpis)],
            "timeSeries": [b.to_dict() for b in group_chats_by_period(filtered, self.period)],
            "products": [
                {"name": p.name, "value": p.mentions}
                for p in analyze_product_mentions(filtered)[:self.config.TOP_PRODUCTS_LIMIT]
            ],
            "peakHours": [h.to_dict() for h in get_peak_hours(filtered, self.config.PEAK_HOURS_TOP_N)],
            "dayOfWeek": [d.to_dict() for d in analyze_by_day_of_week(filtered)],
            "recentConversations": [c.to_dict() for c in filtered[:RECENT_CONVERSATIONS_LIMIT]],
        }
