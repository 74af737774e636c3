"""Data models for Chat Insights."""

from .conversation import (
    Status,
    STATUS_ALL,
    STATUS_FIELDS,
    RawMessage,
    RawMessageData,
    RawConversation,
    HumanMessageInfo,
    Conversation,
)
from .analytics import (
    KPISummary,
    ProductCount,
    ConversationMetrics,
    StatusSlice,
    PeriodBucket,
    ProductStats,
    HourSlot,
    DayOfWeekSlot,
    GrowthResult,
    PeriodComparison,
    RecentPeriodComparison,
    ClientStats,
)
from .filters import FilterSpec

__all__ = [
    'Status', 'STATUS_ALL', 'STATUS_FIELDS', 'RawMessage', 'RawMessageData',
    'RawConversation', 'HumanMessageInfo', 'Conversation', 'KPISummary',
    'ProductCount', 'ConversationMetrics', 'StatusSlice', 'PeriodBucket',
    'ProductStats', 'HourSlot', 'DayOfWeekSlot', 'GrowthResult',
    'PeriodComparison', 'RecentPeriodComparison', 'ClientStats', 'FilterSpec',
]
