"""Parsing, transformation and filtering of chat conversations."""

from .parser import parse_human_message, extract_tools_used, extract_products_mentioned
from .transformer import ConversationTransformer, transform_single_chat, transform_chat_data
from .filters import (
    apply_filters,
    clear_filters,
    filter_by_date_range,
    filter_by_date_preset,
    filter_by_status,
    filter_by_product,
    filter_by_client,
    filter_by_search_text,
    filter_chats_by_date_range,
    get_active_filters_description,
    has_active_filters,
)

__all__ = [
    'parse_human_message', 'extract_tools_used', 'extract_products_mentioned',
    'ConversationTransformer', 'transform_single_chat', 'transform_chat_data',
    'apply_filters', 'clear_filters', 'filter_by_date_range', 'filter_by_date_preset',
    'filter_by_status', 'filter_by_product', 'filter_by_client', 'filter_by_search_text',
    'filter_chats_by_date_range', 'get_active_filters_description', 'has_active_filters',
]
