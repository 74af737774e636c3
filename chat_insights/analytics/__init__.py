"""KPIs and analytics derived from conversations."""

from .kpis import calculate_kpis, get_conversation_metrics, status_breakdown, round_one_decimal
from .grouping import (
    PERIOD_DAY,
    PERIOD_WEEK,
    PERIOD_MONTH,
    period_key,
    group_chats_by_period,
    analyze_product_mentions,
    analyze_conversation_hours,
    get_peak_hours,
    analyze_by_day_of_week,
    calculate_change,
    calculate_growth,
    compare_periods_kpis,
    compare_recent_periods,
    analyze_clients,
)

__all__ = [
    'calculate_kpis', 'get_conversation_metrics', 'status_breakdown', 'round_one_decimal',
    'PERIOD_DAY', 'PERIOD_WEEK', 'PERIOD_MONTH', 'period_key', 'group_chats_by_period',
    'analyze_product_mentions', 'analyze_conversation_hours', 'get_peak_hours',
    'analyze_by_day_of_week', 'calculate_change', 'calculate_growth',
    'compare_periods_kpis', 'compare_recent_periods', 'analyze_clients',
]
