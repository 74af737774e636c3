"""
KPI aggregation over a list of conversations.
"""

import math
from typing import Dict, List, Optional, Sequence

from ..models.analytics import KPISummary, ProductCount, ConversationMetrics, StatusSlice
from ..models.conversation import Conversation, Status

STATUS_LABELS = {
    Status.ABIERTA: "Abiertas",
    Status.GANADA: "Ganadas",
    Status.PERDIDA: "Perdidas",
    Status.PENDIENTE: "Pendientes",
}


def round_one_decimal(value: float) -> float:
    """Round half up to one decimal (2.25 -> 2.3, unlike round())."""
    return math.floor(value * 10 + 0.5) / 10


def calculate_kpis(conversations: Optional[Sequence[Conversation]], top_n: int = 10) -> KPISummary:
    """
    Reduce conversations into summary counters, rates and a product ranking.

    Args:
        conversations: Conversations to aggregate
        top_n: Number of products kept in the ranking

    Returns:
        KPISummary; all zeros for an empty input
    """
    if not conversations:
        return KPISummary()

    status_counts: Dict[Status, int] = {status: 0 for status in Status}
    total_duration = 0.0
    product_counts: Dict[str, int] = {}
    unique_phones = set()

    for conversation in conversations:
        status_counts[conversation.status] += 1
        total_duration += conversation.duration

        for product in conversation.products:
            product_counts[product] = product_counts.get(product, 0) + 1

        if conversation.client_phone:
            unique_phones.add(conversation.client_phone)

    # sorted() is stable, so ties keep first-seen order
    top_products = [
        ProductCount(product=product, count=count)
        for product, count in sorted(product_counts.items(), key=lambda x: x[1], reverse=True)[:top_n]
    ]

    total = len(conversations)
    average_response_time = total_duration / total / 60
    conversion_rate = status_counts[Status.GANADA] / total * 100

    return KPISummary(
        total_conversations=total,
        open_conversations=status_counts[Status.ABIERTA],
        won_conversations=status_counts[Status.GANADA],
        lost_conversations=status_counts[Status.PERDIDA],
        pending_conversations=status_counts[Status.PENDIENTE],
        average_response_time=round_one_decimal(average_response_time),
        conversion_rate=round_one_decimal(conversion_rate),
        top_products=top_products,
        total_unique_clients=len(unique_phones),
    )


def get_conversation_metrics(conversations: Optional[Sequence[Conversation]]) -> ConversationMetrics:
    """
    Average length and duration of conversations, and the share left pending.
    """
    if not conversations:
        return ConversationMetrics()

    total = len(conversations)
    total_messages = sum(c.message_count for c in conversations)
    total_duration = sum(c.duration for c in conversations)
    pending = sum(1 for c in conversations if c.status == Status.PENDIENTE)

    return ConversationMetrics(
        average_messages_per_conversation=round_one_decimal(total_messages / total),
        average_duration=round_one_decimal(total_duration / total / 60),
        abandonment_rate=round_one_decimal(pending / total * 100),
    )


def status_breakdown(kpis: KPISummary) -> List[StatusSlice]:
    """
    Status counts labelled for display, without empty statuses.
    """
    slices = [
        StatusSlice(STATUS_LABELS[Status.ABIERTA], kpis.open_conversations),
        StatusSlice(STATUS_LABELS[Status.GANADA], kpis.won_conversations),
        StatusSlice(STATUS_LABELS[Status.PERDIDA], kpis.lost_conversations),
        StatusSlice(STATUS_LABELS[Status.PENDIENTE], kpis.pending_conversations),
    ]
    return [s for s in slices if s.value > 0]
