"""
Extraction of structured fields from raw message text.

Human messages arrive as ``"Fono: 569... | Nombre: ... | Mensaje: ..."``.
AI messages may carry a ``[Used tools: Tool: <name>, Input: ...]`` block and
mention product brands anywhere in the text. None of these functions raise.
"""

import re
from typing import List, Optional, Sequence

from ..config.base_config import DEFAULT_PRODUCT_BRANDS
from ..models.conversation import HumanMessageInfo

PHONE_PATTERN = re.compile(r"Fono:\s*(\d+)")
NAME_PATTERN = re.compile(r"Nombre:\s*([^|]+)")
MESSAGE_PATTERN = re.compile(r"Mensaje:\s*(.+)")

USED_TOOLS_PATTERN = re.compile(r"\[Used tools:\s*([^\]]+)\]")
TOOL_NAME_PATTERN = re.compile(r"Tool:\s*([^,]+)")


def parse_human_message(content: Optional[str]) -> HumanMessageInfo:
    """
    Parse phone, name and message text out of a human message.

    Missing markers resolve to empty strings, except the message text which
    falls back to the full content.
    """
    content = content or ""

    phone_match = PHONE_PATTERN.search(content)
    name_match = NAME_PATTERN.search(content)
    message_match = MESSAGE_PATTERN.search(content)

    return HumanMessageInfo(
        phone=phone_match.group(1).strip() if phone_match else "",
        name=name_match.group(1).strip() if name_match else "",
        message=message_match.group(1).strip() if message_match else content,
    )


def extract_tools_used(content: Optional[str]) -> List[str]:
    """
    Extract tool names from a ``[Used tools: ...]`` block, in order.
    """
    tools_match = USED_TOOLS_PATTERN.search(content or "")
    if not tools_match:
        return []

    return [match.group(1).strip() for match in TOOL_NAME_PATTERN.finditer(tools_match.group(1))]


def extract_products_mentioned(content: Optional[str],
                               brands: Optional[Sequence[str]] = None) -> List[str]:
    """
    Return the reference brands mentioned in the text.

    Matching is a case-insensitive substring test. The result follows the
    order of the reference list and holds each brand at most once.
    """
    content_lower = (content or "").lower()
    products = []

    for brand in brands if brands is not None else DEFAULT_PRODUCT_BRANDS:
        if brand.lower() in content_lower and brand not in products:
            products.append(brand)

    return products
