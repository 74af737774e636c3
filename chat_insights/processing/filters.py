"""
Filtering of conversation lists.

Every filter is a pure intersection: it returns a new list holding the
conversations that satisfy it. Absent or empty filter values are no-ops.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..models.conversation import Conversation, STATUS_ALL
from ..models.filters import (
    FilterSpec,
    DateLike,
    DATE_PRESET_DAYS,
    DATE_PRESET_LABELS,
    DATE_PRESET_YESTERDAY,
)
from ..utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

Filters = Union[FilterSpec, Mapping[str, Any], None]


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return datetime.fromisoformat(str(value))


def start_of_day(value: DateLike) -> datetime:
    return _to_datetime(value).replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: DateLike) -> datetime:
    return _to_datetime(value).replace(hour=23, minute=59, second=59, microsecond=999999)


def _aligned(bound: datetime, reference: datetime) -> datetime:
    """Give ``bound`` the same naive/aware flavour as ``reference``."""
    if reference.tzinfo is not None and bound.tzinfo is None:
        return bound.replace(tzinfo=reference.tzinfo)
    if reference.tzinfo is None and bound.tzinfo is not None:
        return bound.astimezone().replace(tzinfo=None)
    return bound


def _as_spec(filters: Filters) -> FilterSpec:
    if isinstance(filters, FilterSpec):
        return filters
    return FilterSpec.from_dict(filters)


def apply_filters(conversations: Optional[Sequence[Conversation]], filters: Filters = None,
                  clock: Optional[Clock] = None) -> List[Conversation]:
    """
    Apply every active filter (logical AND).

    Args:
        conversations: Conversations to filter
        filters: FilterSpec, or a mapping with the front-end keys
        clock: Source of "now" for date presets

    Returns:
        New list with the matching conversations, in input order
    """
    if conversations is None:
        return []

    spec = _as_spec(filters)
    filtered = list(conversations)

    if spec.start_date or spec.end_date:
        filtered = filter_by_date_range(filtered, spec.start_date, spec.end_date)

    if spec.date_preset:
        filtered = filter_by_date_preset(filtered, spec.date_preset, clock)

    if spec.status and spec.status != STATUS_ALL:
        filtered = filter_by_status(filtered, spec.status)

    if spec.product:
        filtered = filter_by_product(filtered, spec.product)

    if spec.client:
        filtered = filter_by_client(filtered, spec.client)

    if spec.search_text:
        filtered = filter_by_search_text(filtered, spec.search_text)

    logger.debug(f"Filters kept {len(filtered)} of {len(conversations)} conversations")
    return filtered


def filter_by_date_range(conversations: Sequence[Conversation],
                         start_date: Optional[DateLike],
                         end_date: Optional[DateLike]) -> List[Conversation]:
    """
    Keep conversations between the start of ``start_date``'s day and the end
    of ``end_date``'s day. Either bound may be omitted.
    """
    if not start_date and not end_date:
        return list(conversations)

    start = start_of_day(start_date) if start_date else None
    end = end_of_day(end_date) if end_date else None

    result = []
    for conversation in conversations:
        if start is not None and conversation.date < _aligned(start, conversation.date):
            continue
        if end is not None and conversation.date > _aligned(end, conversation.date):
            continue
        result.append(conversation)
    return result


def filter_by_date_preset(conversations: Sequence[Conversation], preset: str,
                          clock: Optional[Clock] = None) -> List[Conversation]:
    """
    Keep conversations inside a relative window ending today.

    ``yesterday`` covers only the previous calendar day; the other presets run
    from the start of the day N days ago until the end of today. Unknown
    presets leave the list unchanged.
    """
    now = (clock or SystemClock()).now()

    if preset == DATE_PRESET_YESTERDAY:
        yesterday = now - timedelta(days=1)
        return filter_by_date_range(conversations, start_of_day(yesterday), end_of_day(yesterday))

    if preset not in DATE_PRESET_DAYS:
        logger.debug(f"Ignoring unknown date preset: {preset}")
        return list(conversations)

    start = start_of_day(now - timedelta(days=DATE_PRESET_DAYS[preset]))
    return filter_by_date_range(conversations, start, end_of_day(now))


def filter_by_status(conversations: Sequence[Conversation], status: Optional[str]) -> List[Conversation]:
    if not status or status == STATUS_ALL:
        return list(conversations)
    return [c for c in conversations if c.status == status]


def filter_by_product(conversations: Sequence[Conversation], product: Optional[str]) -> List[Conversation]:
    if not product:
        return list(conversations)
    product_lower = product.lower()
    return [c for c in conversations if any(product_lower in p.lower() for p in c.products)]


def filter_by_client(conversations: Sequence[Conversation], client: Optional[str]) -> List[Conversation]:
    """Match a substring of the client's name or phone."""
    if not client:
        return list(conversations)
    client_lower = client.lower()
    return [
        c for c in conversations
        if client_lower in (c.client_name or "").lower() or client_lower in (c.client_phone or "").lower()
    ]


def _matches_search_text(conversation: Conversation, search_lower: str) -> bool:
    if search_lower in (conversation.client_name or "").lower():
        return True
    if search_lower in (conversation.client_phone or "").lower():
        return True
    if search_lower in (conversation.initial_message or "").lower():
        return True
    if any(search_lower in p.lower() for p in conversation.products):
        return True
    return any(search_lower in (m.content or "").lower() for m in conversation.messages)


def filter_by_search_text(conversations: Sequence[Conversation], search_text: Optional[str]) -> List[Conversation]:
    """
    Free-text search across client name, phone, initial message, products
    and the content of every message.
    """
    if not search_text:
        return list(conversations)
    search_lower = search_text.lower()
    return [c for c in conversations if _matches_search_text(c, search_lower)]


def filter_chats_by_date_range(conversations: Sequence[Conversation],
                               start: Optional[datetime],
                               end: Optional[datetime]) -> List[Conversation]:
    """
    Keep conversations with ``start <= date <= end`` using the exact bounds.
    Returns the input unchanged when either bound is missing.
    """
    if not start or not end:
        return list(conversations)
    return [
        c for c in conversations
        if _aligned(start, c.date) <= c.date <= _aligned(end, c.date)
    ]


def get_active_filters_description(filters: Filters) -> List[str]:
    """
    Human-readable labels for the active filters, in display order.
    """
    spec = _as_spec(filters)
    active = []

    if spec.date_preset:
        active.append(DATE_PRESET_LABELS.get(spec.date_preset, spec.date_preset))

    if spec.start_date and spec.end_date:
        active.append(f"Rango: {spec.start_date} - {spec.end_date}")
    elif spec.start_date:
        active.append(f"Desde: {spec.start_date}")
    elif spec.end_date:
        active.append(f"Hasta: {spec.end_date}")

    if spec.status and spec.status != STATUS_ALL:
        active.append(f"Estado: {spec.status}")
    if spec.product:
        active.append(f"Producto: {spec.product}")
    if spec.client:
        active.append(f"Cliente: {spec.client}")
    if spec.search_text:
        active.append(f'Búsqueda: "{spec.search_text}"')

    return active


def has_active_filters(filters: Filters) -> bool:
    if filters is None:
        return False
    spec = _as_spec(filters)
    return bool(
        spec.date_preset
        or spec.start_date
        or spec.end_date
        or (spec.status and spec.status != STATUS_ALL)
        or spec.product
        or spec.client
        or spec.search_text
    )


def clear_filters() -> FilterSpec:
    """Neutral filter set: applying it returns the input unchanged."""
    return FilterSpec()
