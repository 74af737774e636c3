"""
Models for derived analytics values.

Every value here is recomputed on demand from a list of conversations and
never persisted. ``to_dict`` keeps the key names used by the dashboard
front-end.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional


@dataclass
class ProductCount:
    product: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"product": self.product, "count": self.count}


@dataclass
class KPISummary:
    """
    Summary counters, rates and rankings over a set of conversations.
    """
    total_conversations: int = 0
    open_conversations: int = 0
    won_conversations: int = 0
    lost_conversations: int = 0
    pending_conversations: int = 0
    average_response_time: float = 0  # minutes
    conversion_rate: float = 0        # percentage
    top_products: List[ProductCount] = field(default_factory=list)
    total_unique_clients: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalConversations": self.total_conversations,
            "openConversations": self.open_conversations,
            "wonConversations": self.won_conversations,
            "lostConversations": self.lost_conversations,
            "pendingConversations": self.pending_conversations,
            "averageResponseTime": self.average_response_time,
            "conversionRate": self.conversion_rate,
            "topProducts": [product.to_dict() for product in self.top_products],
            "totalUniqueClients": self.total_unique_clients,
        }


@dataclass
class ConversationMetrics:
    average_messages_per_conversation: float = 0
    average_duration: float = 0  # minutes
    abandonment_rate: float = 0  # percentage of pending conversations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "averageMessagesPerConversation": self.average_messages_per_conversation,
            "averageDuration": self.average_duration,
            "abandonmentRate": self.abandonment_rate,
        }


@dataclass
class StatusSlice:
    """Labelled status count, as shown in the status donut chart."""
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class PeriodBucket:
    """
    Conversations aggregated into one calendar period (day, week or month).
    """
    date: str
    count: int = 0
    open: int = 0
    won: int = 0
    lost: int = 0
    pending: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "count": self.count,
            "open": self.open,
            "won": self.won,
            "lost": self.lost,
            "pending": self.pending,
        }


@dataclass
class ProductStats:
    name: str
    mentions: int = 0
    conversations: int = 0
    won: int = 0
    lost: int = 0
    open: int = 0
    pending: int = 0
    conversion_rate: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mentions": self.mentions,
            "conversations": self.conversations,
            "won": self.won,
            "lost": self.lost,
            "open": self.open,
            "pending": self.pending,
            "conversionRate": self.conversion_rate,
        }


@dataclass
class HourSlot:
    hour: str  # "00:00" .. "23:00"
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"hour": self.hour, "count": self.count}


@dataclass
class DayOfWeekSlot:
    day: str
    day_index: int  # 0 = Sunday
    count: int = 0
    won: int = 0
    lost: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "dayIndex": self.day_index,
            "count": self.count,
            "won": self.won,
            "lost": self.lost,
        }


@dataclass
class GrowthResult:
    current: int
    previous: int
    growth: float
    is_positive: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current,
            "previous": self.previous,
            "growth": self.growth,
            "isPositive": self.is_positive,
        }


@dataclass
class PeriodComparison:
    total_change: float
    won_change: float
    open_change: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalChange": self.total_change,
            "wonChange": self.won_change,
            "openChange": self.open_change,
        }


@dataclass
class RecentPeriodComparison:
    """
    Growth and KPI changes of the last N days against the N days before.
    """
    current_start: datetime
    current_end: datetime
    previous_start: datetime
    growth: GrowthResult
    comparison: PeriodComparison


@dataclass
class ClientStats:
    phone: str
    name: str
    conversation_count: int = 0
    last_interaction: Optional[datetime] = None
    products: List[str] = field(default_factory=list)
    won: int = 0
    lost: int = 0
    open: int = 0
    pending: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phone": self.phone,
            "name": self.name,
            "conversationCount": self.conversation_count,
            "lastInteraction": self.last_interaction.isoformat() if self.last_interaction else None,
            "products": list(self.products),
            "won": self.won,
            "lost": self.lost,
            "open": self.open,
            "pending": self.pending,
        }
