"""
Time-series, product, hour-of-day and day-of-week analysis of conversations.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .kpis import round_one_decimal
from ..models.analytics import (
    PeriodBucket,
    ProductStats,
    HourSlot,
    DayOfWeekSlot,
    GrowthResult,
    PeriodComparison,
    RecentPeriodComparison,
    ClientStats,
)
from ..models.conversation import Conversation, Status, STATUS_FIELDS
from ..processing.filters import filter_chats_by_date_range
from ..utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

PERIOD_DAY = "day"
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"

DAY_NAMES = ["Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"]


def period_key(moment: datetime, period: str = PERIOD_DAY) -> str:
    """
    Sortable key of the period containing ``moment``.

    Weeks start on Monday and are keyed by that Monday's date.
    """
    if period == PERIOD_WEEK:
        week_start = moment.date() - timedelta(days=moment.weekday())
        return week_start.strftime("%Y-%m-%d")
    if period == PERIOD_MONTH:
        return moment.strftime("%Y-%m")
    return moment.strftime("%Y-%m-%d")


def group_chats_by_period(conversations: Optional[Sequence[Conversation]],
                          period: str = PERIOD_DAY) -> List[PeriodBucket]:
    """
    Count conversations, overall and per status, for each day, week or month.

    Unknown periods are treated as ``day``. Buckets come back in ascending
    key order.
    """
    if not conversations:
        return []
    if period not in (PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH):
        logger.warning(f"Unknown period '{period}', grouping by day")
        period = PERIOD_DAY

    buckets: Dict[str, PeriodBucket] = {}
    for conversation in conversations:
        key = period_key(conversation.date, period)
        bucket = buckets.setdefault(key, PeriodBucket(date=key))
        bucket.count += 1
        status_field = STATUS_FIELDS[conversation.status]
        setattr(bucket, status_field, getattr(bucket, status_field) + 1)

    return sorted(buckets.values(), key=lambda b: b.date)


def analyze_product_mentions(conversations: Optional[Sequence[Conversation]]) -> List[ProductStats]:
    """
    Per-product mention counts, per-status counts and conversion rate,
    most mentioned first.
    """
    if not conversations:
        return []

    stats: Dict[str, ProductStats] = {}
    for conversation in conversations:
        status_field = STATUS_FIELDS[conversation.status]
        for product in conversation.products:
            product_stats = stats.setdefault(product, ProductStats(name=product))
            product_stats.mentions += 1
            product_stats.conversations += 1
            setattr(product_stats, status_field, getattr(product_stats, status_field) + 1)

    for product_stats in stats.values():
        if product_stats.conversations > 0:
            product_stats.conversion_rate = round_one_decimal(
                product_stats.won / product_stats.conversations * 100
            )

    return sorted(stats.values(), key=lambda p: p.mentions, reverse=True)


def analyze_conversation_hours(conversations: Optional[Sequence[Conversation]]) -> List[HourSlot]:
    """
    24-slot histogram of conversation start times, "00:00" to "23:00".
    """
    if not conversations:
        return []

    hour_counts = [HourSlot(hour=f"{hour:02d}:00") for hour in range(24)]
    for conversation in conversations:
        hour_counts[conversation.date.hour].count += 1
    return hour_counts


def get_peak_hours(conversations: Optional[Sequence[Conversation]], top_n: int = 5) -> List[HourSlot]:
    """
    The ``top_n`` busiest hours; ties keep ascending hour order.
    """
    hour_counts = analyze_conversation_hours(conversations)
    return sorted(hour_counts, key=lambda h: h.count, reverse=True)[:top_n]


def analyze_by_day_of_week(conversations: Optional[Sequence[Conversation]]) -> List[DayOfWeekSlot]:
    """
    7-slot histogram by weekday, Sunday first, with won/lost sub-counts.
    """
    if not conversations:
        return []

    day_counts = [DayOfWeekSlot(day=name, day_index=index) for index, name in enumerate(DAY_NAMES)]
    for conversation in conversations:
        # datetime.weekday() is Monday=0; shift to Sunday=0
        slot = day_counts[(conversation.date.weekday() + 1) % 7]
        slot.count += 1
        if conversation.status == Status.GANADA:
            slot.won += 1
        elif conversation.status == Status.PERDIDA:
            slot.lost += 1
    return day_counts


def calculate_change(current: int, previous: int) -> float:
    """
    Percentage change rounded to one decimal.

    With no previous value the change is 100 when there is any current value
    and 0 otherwise.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round_one_decimal((current - previous) / previous * 100)


def calculate_growth(current_conversations: Sequence[Conversation],
                     previous_conversations: Sequence[Conversation]) -> GrowthResult:
    current = len(current_conversations)
    previous = len(previous_conversations)
    growth = calculate_change(current, previous)
    return GrowthResult(current=current, previous=previous, growth=growth, is_positive=growth >= 0)


def compare_periods_kpis(current_conversations: Sequence[Conversation],
                         previous_conversations: Sequence[Conversation]) -> PeriodComparison:
    def count(conversations, status):
        return sum(1 for c in conversations if c.status == status)

    return PeriodComparison(
        total_change=calculate_change(len(current_conversations), len(previous_conversations)),
        won_change=calculate_change(count(current_conversations, Status.GANADA),
                                    count(previous_conversations, Status.GANADA)),
        open_change=calculate_change(count(current_conversations, Status.ABIERTA),
                                     count(previous_conversations, Status.ABIERTA)),
    )


def compare_recent_periods(conversations: Sequence[Conversation], days: int = 30,
                           clock: Optional[Clock] = None) -> RecentPeriodComparison:
    """
    Compare the last ``days`` days against the ``days`` days before them.

    The current window is ``[now - days, now]``; the previous window is
    ``[now - 2*days, now - days)``.
    """
    now = (clock or SystemClock()).now()
    current_start = now - timedelta(days=days)
    previous_start = now - timedelta(days=2 * days)

    current = filter_chats_by_date_range(conversations, current_start, now)
    previous_or_boundary = filter_chats_by_date_range(conversations, previous_start, current_start)
    current_ids = {id(c) for c in current}
    previous = [c for c in previous_or_boundary if id(c) not in current_ids]

    return RecentPeriodComparison(
        current_start=current_start,
        current_end=now,
        previous_start=previous_start,
        growth=calculate_growth(current, previous),
        comparison=compare_periods_kpis(current, previous),
    )


def analyze_clients(conversations: Optional[Sequence[Conversation]]) -> List[ClientStats]:
    """
    Per-client activity keyed by phone (or name), busiest clients first.
    """
    if not conversations:
        return []

    clients: Dict[str, ClientStats] = {}
    for conversation in conversations:
        key = conversation.client_phone or conversation.client_name
        client = clients.get(key)
        if client is None:
            client = clients[key] = ClientStats(
                phone=conversation.client_phone,
                name=conversation.client_name,
                last_interaction=conversation.date,
            )

        client.conversation_count += 1
        status_field = STATUS_FIELDS[conversation.status]
        setattr(client, status_field, getattr(client, status_field) + 1)

        if conversation.date > client.last_interaction:
            client.last_interaction = conversation.date

        for product in conversation.products:
            if product not in client.products:
                client.products.append(product)

    return sorted(clients.values(), key=lambda c: c.conversation_count, reverse=True)
